"""
Tests for the assessment domain model and grading rule.
"""

import pytest

from inkwell.assessments.model import Assessment, Feedback, GradingResult, Question, grade


def make_assessment(*questions):
    return Assessment(
        id=1,
        user_id=7,
        title="Geography",
        description="Capitals",
        session_id="session-1",
        questions=tuple(questions),
    )


class TestGrade:
    def test_exact_match_is_correct(self):
        result = grade(Question(1, "Capital of France?", "Paris"), "Paris")
        assert result == GradingResult(is_correct=True, feedback=Feedback.CORRECT)

    def test_mismatch_is_incorrect(self):
        result = grade(Question(2, "6 x 7?", "42"), "43")
        assert result.is_correct is False
        assert result.feedback is Feedback.INCORRECT

    @pytest.mark.parametrize("answer", ["paris", "PARIS", " Paris", "Paris ", "Paris\n", ""])
    def test_no_normalization(self, answer):
        assert grade(Question(1, "Capital of France?", "Paris"), answer).is_correct is False

    def test_feedback_labels(self):
        assert Feedback.CORRECT.value == "Correct"
        assert Feedback.INCORRECT.value == "Incorrect"
        assert GradingResult.for_correctness(True).feedback is Feedback.CORRECT
        assert GradingResult.for_correctness(False).feedback is Feedback.INCORRECT


class TestFindQuestion:
    def test_finds_by_id(self):
        paris = Question(1, "Capital of France?", "Paris")
        answer = Question(2, "6 x 7?", "42")
        assert make_assessment(paris, answer).find_question(2) is answer

    def test_missing_id(self):
        assert make_assessment(Question(1, "q", "a")).find_question(99) is None

    @pytest.mark.parametrize("question_id", [None, 0, -1])
    def test_unset_ids_never_match(self, question_id):
        # Even a stored question with an unset id must not be found
        assessment = make_assessment(Question(0, "q", "a"), Question(None, "q", "a"))
        assert assessment.find_question(question_id) is None

    def test_first_duplicate_wins(self):
        first = Question(3, "first", "a", position=0)
        second = Question(3, "second", "b", position=1)
        assert make_assessment(first, second).find_question(3) is first
