"""Question Responder that shakes the ball once for a single question."""

import logging
import time
from eightball.answer_source import AnswerSource
from models.schemas import ResponseRecord, ResponseStatus


logger = logging.getLogger(__name__)


ANSWER_SOURCE_ERROR_MESSAGE = "Error interacting with answer source"


class QuestionResponder:
    """Produces a timed ResponseRecord for one numbered question."""

    def __init__(self, answer_source: AnswerSource):
        """
        Initialize the Question Responder.

        Args:
            answer_source: Where answers are drawn from
        """
        self.answer_source = answer_source

    def answer(self, question_number: int, question: str) -> ResponseRecord:
        """
        Draw an answer for a question and time how long it took.

        Failures of the answer source never propagate: they are reported
        in the returned record so sibling questions in a batch are unaffected.

        Args:
            question_number: 1-based position of the question in its request
            question: The question text

        Returns:
            A frozen ResponseRecord for the question
        """
        # Remember when processing started
        start_time = time.perf_counter()

        try:
            # Shake the ball
            answer = self.answer_source.draw()
        except Exception as e:
            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                f"Question {question_number} failed after {elapsed_ms}ms: {e}",
                exc_info=True,
                extra={'question_number': question_number}
            )
            return ResponseRecord(
                questionNumber=question_number,
                question=question,
                elapsedMillis=elapsed_ms,
                status=ResponseStatus.INTERNAL_ERROR,
                message=ANSWER_SOURCE_ERROR_MESSAGE
            )

        # Calculate time to answer
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        logger.debug(
            f"Question {question_number} answered in {elapsed_ms}ms",
            extra={'question_number': question_number}
        )

        return ResponseRecord(
            questionNumber=question_number,
            question=question,
            answer=answer,
            elapsedMillis=elapsed_ms
        )
