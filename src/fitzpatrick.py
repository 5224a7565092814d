# src/fitzpatrick.py
import logging

from models import (
    IncompleteAnswersError,
    InvalidAnswerError,
    SensitivityResult,
    SkinType,
)
from recommendations import REAPPLY_ADVICE, SKIN_TYPE_TEXT

logger = logging.getLogger(__name__)

# Cada resposta vale o índice da opção (0-4)
QUESTIONS = [
    {
        "text": "What color are your eyes?",
        "options": ["Light blue, gray, green", "Blue, gray, or green", "Blue", "Dark Brown", "Brownish Black"],
    },
    {
        "text": "What is your natural hair color?",
        "options": ["Sandy red", "Blonde", "Chestnut/Dark Blonde", "Dark brown", "Black"],
    },
    {
        "text": "What is your skin color (unexposed areas)?",
        "options": ["Reddish", "Very Pale", "Pale with a beige tint", "Light brown", "Dark brown"],
    },
    {
        "text": "Do you have freckles on unexposed areas?",
        "options": ["Many", "Several", "Few", "Incidental", "None"],
    },
    {
        "text": "What happens when you stay too long in the sun?",
        "options": [
            "Painful redness, blistering, peeling",
            "Blistering followed by peeling",
            "Burns sometimes followed by peeling",
            "Rare burns",
            "Never had burns",
        ],
    },
    {
        "text": "To what degree do you turn brown?",
        "options": ["Hardly or not at all", "Light color tan", "Reasonable tan", "Tan very easily", "Turn dark brown quickly"],
    },
    {
        "text": "Do you turn brown after several hours of sun exposure?",
        "options": ["Never", "Seldom", "Sometimes", "Often", "Always"],
    },
    {
        "text": "How does your face react to the sun?",
        "options": ["Very sensitive", "Sensitive", "Normal", "Very resistant", "Never had a problem"],
    },
    {
        "text": "When did you last expose your body to the sun (or artificial sunlamp/tanning cream)?",
        "options": [
            "More than 3 months ago",
            "2-3 months ago",
            "1-2 months ago",
            "Less than a month ago",
            "Less than 2 weeks ago",
        ],
    },
    {
        "text": "Do you expose your face to the sun?",
        "options": ["Never", "Hardly ever", "Sometimes", "Often", "Always"],
    },
]

QUESTION_COUNT = len(QUESTIONS)
MIN_ANSWER = 0
MAX_ANSWER = 4

# (limite superior inclusivo, tipo)
SCORE_BOUNDARIES = [
    (6, SkinType.TYPE1),
    (13, SkinType.TYPE2),
    (20, SkinType.TYPE3),
    (27, SkinType.TYPE4),
    (34, SkinType.TYPE5),
]


def skin_type_for_score(score: int) -> SkinType:
    for upper, skin_type in SCORE_BOUNDARIES:
        if score <= upper:
            return skin_type
    return SkinType.TYPE6


def check_answer(question, value):
    """Return an InvalidAnswerError when value is not an int in 0..4, else None."""
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_ANSWER <= value <= MAX_ANSWER:
        return InvalidAnswerError(
            message=f"Answer to question {question + 1} must be an integer between {MIN_ANSWER} and {MAX_ANSWER}",
            question=question,
            value=repr(value),
        )
    return None


def score_questionnaire(answers):
    """Score ten answers (0-4 each) into a Fitzpatrick-inspired skin type.

    Returns InvalidAnswerError for a wrong-sized vector or an out-of-range
    value, IncompleteAnswersError when any slot is still None.
    """
    if not isinstance(answers, (list, tuple)):
        return InvalidAnswerError(message=f"Expected a list of {QUESTION_COUNT} answers", value=repr(answers))
    if len(answers) != QUESTION_COUNT:
        return InvalidAnswerError(message=f"Expected {QUESTION_COUNT} answers, got {len(answers)}")

    for question, value in enumerate(answers):
        if value is None:
            continue
        error = check_answer(question, value)
        if error is not None:
            return error

    missing = [i for i, value in enumerate(answers) if value is None]
    if missing:
        return IncompleteAnswersError(
            message=f"{len(missing)} question(s) still unanswered",
            missing=missing,
        )

    total = sum(answers)
    skin_type = skin_type_for_score(total)
    text = SKIN_TYPE_TEXT[skin_type]

    return SensitivityResult(
        total_score=total,
        skin_type=skin_type,
        label=text["label"],
        color=text["color"],
        reapply_advice=REAPPLY_ADVICE[skin_type],
    )


class Questionnaire:
    """Incremental questionnaire: Answering(current) until show_result() confirms.

    Answering the last question does not finish it; the user has to ask for the
    result explicitly. reset() goes back to the first question with no answers.
    """

    ANSWERING = "answering"
    COMPLETE = "complete"

    def __init__(self, answers=None, current=0, state=ANSWERING):
        self.answers = list(answers) if answers is not None else [None] * QUESTION_COUNT
        if len(self.answers) != QUESTION_COUNT:
            raise ValueError(f"Questionnaire needs {QUESTION_COUNT} answer slots")
        self.current = self._clamp(current)
        self.state = state

    @staticmethod
    def _clamp(index):
        return max(0, min(QUESTION_COUNT - 1, index))

    @property
    def is_complete(self):
        return self.state == self.COMPLETE

    def pending(self):
        """Index of the active question, or None once the result was shown."""
        return None if self.is_complete else self.current

    def is_ready(self):
        return all(a is not None for a in self.answers)

    def answer(self, value, question=None):
        if self.is_complete:
            return None
        index = self.current if question is None else question
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < QUESTION_COUNT:
            return InvalidAnswerError(message=f"Unknown question {index!r}", question=None, value=repr(value))
        error = check_answer(index, value)
        if error is not None:
            return error
        self.answers[index] = value
        self.current = index
        return None

    def next_question(self):
        if not self.is_complete:
            self.current = self._clamp(self.current + 1)
        return self.current

    def previous_question(self):
        if not self.is_complete:
            self.current = self._clamp(self.current - 1)
        return self.current

    def go_to(self, index):
        if not self.is_complete:
            self.current = self._clamp(index)
        return self.current

    def show_result(self):
        result = score_questionnaire(self.answers)
        if isinstance(result, SensitivityResult):
            self.state = self.COMPLETE
            logger.info("Questionnaire complete: score %s -> %s", result.total_score, result.skin_type.value)
        return result

    def result(self):
        """The scored result once complete, None while answering."""
        if not self.is_complete:
            return None
        return score_questionnaire(self.answers)

    def reset(self):
        self.answers = [None] * QUESTION_COUNT
        self.current = 0
        self.state = self.ANSWERING

    def to_dict(self):
        return {"answers": list(self.answers), "current": self.current, "state": self.state}

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        return cls(
            answers=data.get("answers"),
            current=data.get("current", 0),
            state=data.get("state", cls.ANSWERING),
        )
