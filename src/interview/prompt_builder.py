"""
Prompt builder for question generation and grading.

Holds the fixed prompt templates. The front-end relies on the grading
prompt asking for a score out of 100, which is what the score extractor
looks for in the reply.
"""


class PromptBuilder:
    """Builds the prompts sent to the upstream model."""

    PROBE_PROMPT = "Test connection"

    QUESTION_TEMPLATE = (
        "Generate a challenging interview question for the {domain} domain. "
        "The question should be detailed and technical."
    )

    GRADING_TEMPLATE = (
        'For the {domain} interview question: "{question}"\n\n'
        'Candidate\'s answer: "{user_answer}"\n\n'
        "Please evaluate this answer and provide:\n"
        "1. A score out of 100\n"
        "2. Detailed feedback explaining the score"
    )

    @staticmethod
    def build_question_prompt(domain: str) -> str:
        """
        Build the prompt asking for an interview question.

        Args:
            domain: Subject area of the question.

        Returns:
            The prompt text.
        """
        return PromptBuilder.QUESTION_TEMPLATE.format(domain=domain)

    @staticmethod
    def build_grading_prompt(domain: str, question: str, user_answer: str) -> str:
        """
        Build the prompt asking for a score and feedback on an answer.

        Args:
            domain: Subject area of the question.
            question: The interview question.
            user_answer: The candidate's answer.

        Returns:
            The prompt text.
        """
        return PromptBuilder.GRADING_TEMPLATE.format(
            domain=domain,
            question=question,
            user_answer=user_answer,
        )
