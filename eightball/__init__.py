"""Answer source and per-question responder for the Magic 8 Ball service."""

from eightball.answer_source import AnswerSource, DEFAULT_ANSWERS
from eightball.responder import QuestionResponder, ANSWER_SOURCE_ERROR_MESSAGE

__all__ = [
    "AnswerSource",
    "DEFAULT_ANSWERS",
    "QuestionResponder",
    "ANSWER_SOURCE_ERROR_MESSAGE"
]
