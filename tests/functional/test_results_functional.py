"""Functional tests for per-question result aggregation."""

from __future__ import annotations

from formbuilder.logic.results import format_answer, question_stats, summarize_form
from formbuilder.models.form import Answer, FormResponse


def _responses(question_id, *values, form_id="form-1"):
    return [
        FormResponse(id=f"r{i}", form_id=form_id, answers=[Answer(question_id=question_id, value=v)])
        for i, v in enumerate(values)
    ]


def test_single_choice_counts(make_question, choice_options):
    question = make_question("q1", question_type="single_choice", options=choice_options("Red", "Blue"))
    stats = question_stats(question, _responses("q1", "Red", "Blue", "Red"))
    assert stats == {"type": "choices", "data": {"Red": 2, "Blue": 1}}


def test_yes_no_counts(make_question):
    question = make_question("q1", question_type="yes_no")
    stats = question_stats(question, _responses("q1", True, False, True, True))
    assert stats == {"type": "boolean", "data": {"yes": 3, "no": 1}}


def test_numeric_scale(make_question):
    question = make_question("q1", question_type="integer")
    stats = question_stats(question, _responses("q1", 1, 2, 4))
    assert stats == {"type": "scale", "data": {"average": 2.3, "min": 1, "max": 4}}


def test_average_rounds_half_up(make_question):
    question = make_question("q1", question_type="decimal_number")
    assert question_stats(question, _responses("q1", 2, 2.5))["data"]["average"] == 2.3
    assert question_stats(question, _responses("q1", 1, 2, 2, 2))["data"]["average"] == 1.8


def test_numeric_scale_without_numbers(make_question):
    question = make_question("q1", question_type="decimal_number")
    stats = question_stats(question, _responses("q1", "n/a"))
    assert stats["data"] == {"average": None, "min": None, "max": None}


def test_text_questions_report_answer_count(make_question):
    free = make_question("q1")
    multi = make_question("q2", question_type="multiple_choice")
    assert question_stats(free, _responses("q1", "a", "b")) == {"type": "text", "data": 2}
    assert question_stats(multi, _responses("q1", ["x"])) == {"type": "text", "data": 0}


def test_format_answer(make_question):
    assert format_answer(make_question("q1", question_type="yes_no"), True) == "Yes"
    assert format_answer(make_question("q1", question_type="yes_no"), False) == "No"
    assert format_answer(make_question("q2", question_type="multiple_choice"), ["A", "B"]) == "A, B"
    assert format_answer(make_question("q3", question_type="integer"), 4.0) == "4"


def test_summarize_form_only_counts_its_own_responses(make_form, make_question):
    form = make_form([make_question("q1", question_type="yes_no")])
    responses = _responses("q1", True, False) + _responses("q1", True, form_id="other")

    summary = summarize_form(form, responses)
    assert summary.form_id == "form-1"
    assert summary.response_count == 2
    assert summary.questions[0].code == "Q1"
    assert summary.questions[0].data == {"yes": 1, "no": 1}
