from __future__ import annotations

import pytest

from assessment_core.answer_keys import BEHAVIOUR_TRAITS, INTEREST_CATEGORIES, WORK_VALUE_ATTRIBUTES
from assessment_core.answers import resolve_answer
from assessment_core.scoring import score_behaviour_response, score_interest_inventory, score_work_values
from assessment_core.types import Option, Question


def _wv_question(qid: str, a: list[str], b: list[str]) -> Question:
    return Question(id=qid, number=qid, options=[
        Option(label="a", text="first", attributes=a),
        Option(label="b", text="second", attributes=b),
    ])


def _ii_question(qid: str, number: int, category: str) -> Question:
    return Question(id=qid, number=number, category=category)


def _br_question(qid: str, number: int, first: tuple[str, str], second: tuple[str, str]) -> Question:
    return Question(id=qid, number=number, options=[
        Option(label="0", text=first[0], status=first[1]),
        Option(label="1", text=second[0], status=second[1]),
    ])


# ---- resolution chain ----

def test_resolve_answer_prefers_id_then_number_then_string_number():
    q = Question(id="q5", number=5)
    assert resolve_answer(q, {"q5": "x", 5: "y", "5": "z"}) == "x"
    assert resolve_answer(q, {5: "y", "5": "z"}) == "y"
    assert resolve_answer(q, {"5": "z"}) == "z"
    assert resolve_answer(q, {"q5": "", "5": "z"}) == "z"
    assert resolve_answer(q, {"other": "z"}) is None


def test_resolve_answer_by_id_only():
    q = Question(id="q5", number=5)
    assert resolve_answer(q, {"5": "z"}, by_number=False) is None


# ---- work values ----

def test_work_values_scenario():
    key = [_wv_question("wv-q1", ["Security"], ["Variety", "Creativity"])]
    score = score_work_values({"wv-q1": "b"}, key).to_dict()

    assert score["totalQuestions"] == 1
    assert score["answeredQuestions"] == 1
    assert score["attributes"]["Variety"] == 1
    assert score["attributes"]["Creativity"] == 1
    assert score["attributes"]["Security"] == 0
    assert sum(score["attributes"].values()) == 2
    assert len(score["attributes"]) == 15


def test_work_values_floor_with_no_responses():
    score = score_work_values({})
    assert list(score.attributes) == WORK_VALUE_ATTRIBUTES
    assert all(v == 0 for v in score.attributes.values())
    assert score.answered_questions == 0
    assert score.total_questions == 5


def test_work_values_counts_answer_even_without_matching_option():
    key = [_wv_question("wv-q1", ["Security"], ["Variety"])]
    score = score_work_values({"wv-q1": "c"}, key)
    assert score.answered_questions == 1
    assert sum(score.attributes.values()) == 0


def test_work_values_ignores_unknown_attributes():
    key = [_wv_question("wv-q1", ["Security", "Happiness"], [])]
    score = score_work_values({"wv-q1": "a"}, key)
    assert "Happiness" not in score.attributes
    assert score.attributes["Security"] == 1


def test_work_values_packaged_key():
    score = score_work_values({"wv-q2": "b", "wv-q3": "a", "wv-q5": "b"})
    assert score.answered_questions == 3
    assert score.attributes["Variety"] == 1
    assert score.attributes["Way of Life"] == 1
    assert score.attributes["Achievement"] == 1


# ---- interest inventory ----

def test_interest_inventory_category_isolation():
    key = [_ii_question(f"q{i}", i, c) for i, c in enumerate(INTEREST_CATEGORIES, start=1)]
    score = score_interest_inventory({"q1": "Like"}, key)
    assert score.categories == {"medical": 1, "technology": 0, "commerce": 0, "arts": 0, "fine-arts": 0}


@pytest.mark.parametrize("answer", ["Like", "like", "\U0001F44DLike", "\U0001F44D Like"])
def test_interest_inventory_like_spellings(answer):
    key = [_ii_question("q1", 1, "arts")]
    assert score_interest_inventory({"q1": answer}, key).categories["arts"] == 1


def test_interest_inventory_dislike_counts_as_answered_only():
    key = [_ii_question("q1", 1, "arts"), _ii_question("q2", 2, "arts")]
    score = score_interest_inventory({"q1": "Dislike", "q2": "LIKE"}, key)
    assert score.answered_questions == 2
    assert score.categories["arts"] == 0


def test_interest_inventory_number_fallbacks():
    key = [_ii_question("ii-q1", 1, "commerce"), _ii_question("ii-q2", 2, "commerce")]
    score = score_interest_inventory({1: "Like", "2": "Like"}, key)
    assert score.categories["commerce"] == 2
    assert score.total_questions == 2


def test_interest_inventory_unknown_category_not_tallied():
    key = [_ii_question("q1", 1, "sports")]
    score = score_interest_inventory({"q1": "Like"}, key)
    assert score.answered_questions == 1
    assert sum(score.categories.values()) == 0


def test_interest_inventory_packaged_key_synthesized_id():
    score = score_interest_inventory({"ii-q1": "Like", "q6": "Like", "ii-q5": "Dislike"})
    assert score.categories["medical"] == 2
    assert score.answered_questions == 3
    assert score.total_questions == 6


# ---- behaviour response ----

def test_behaviour_none_status_counts_answered_only():
    key = [_br_question("br-q1", 1, ("keep going", "DI"), ("wait", "None"))]
    score = score_behaviour_response({"br-q1": "wait"}, key)
    assert score.answered_questions == 1
    assert all(v == 0 for v in score.scores.values())


def test_behaviour_trait_tally_and_fixed_keys():
    key = [
        _br_question("br-q1", 1, ("keep going", "DI"), ("wait", "None")),
        _br_question("br-q2", 2, ("explore", "Inq"), ("praise", "Aa")),
        _br_question("br-q3", 3, ("own way", "Ao"), ("speak up", "Sc")),
    ]
    score = score_behaviour_response({"br-q1": "keep going", "2": "praise", 3: "speak up"}, key).to_dict()
    assert list(score["scores"]) == BEHAVIOUR_TRAITS
    assert score["scores"] == {"Aa": 1, "Ao": 0, "Sc": 1, "Inq": 0, "DI": 1}
    assert score["answeredQuestions"] == 3
    assert score["totalQuestions"] == 3


def test_behaviour_unknown_status_and_unmatched_text():
    key = [
        _br_question("br-q1", 1, ("a", "Xx"), ("b", "DI")),
        _br_question("br-q2", 2, ("c", "Aa"), ("d", "Ao")),
    ]
    score = score_behaviour_response({"br-q1": "a", "br-q2": "no such option"}, key)
    assert score.answered_questions == 2
    assert sum(score.scores.values()) == 0


def test_behaviour_packaged_key():
    score = score_behaviour_response({
        "br-q1": "I finish what I start even when it gets hard",
        "br-q2": "I like to find out how things work",
        "br-q4": "I go along with the plan of the group",
    })
    assert score.scores["DI"] == 1
    assert score.scores["Inq"] == 1
    assert score.answered_questions == 3
    assert score.total_questions == 4


def test_scores_never_negative():
    for score in (
        score_work_values({}).attributes,
        score_interest_inventory({}).categories,
        score_behaviour_response({}).scores,
    ):
        assert all(v >= 0 for v in score.values())
