from __future__ import annotations

import pytest

from sponsor_tracker.models.application_status import ApplicationStatus as S
from sponsor_tracker.services.prediction import OutcomePrediction, predict_outcome


def _history(**counts) -> list[S]:
    out: list[S] = []
    for name, n in counts.items():
        out.extend([S[name]] * n)
    return out


def test_no_history_uses_base_rates_unweighted():
    assert predict_outcome(None, []) == OutcomePrediction(0.15, 0.05, 0)
    assert predict_outcome("Worker (Provisional)", []) == OutcomePrediction(0.15, 0.05, 0)


def test_no_history_a_rating():
    # 0.15 * 1.2 -> 0.18, 0.05 * 1.1 -> 0.055... -> 0.06
    assert predict_outcome("A", []) == OutcomePrediction(0.18, 0.06, 0)


def test_b_rating_with_history():
    history = _history(INTERVIEW=1, OFFER=2, REJECTED=1, APPLIED=4, NO_RESPONSE=1, WITHDRAWN=1)
    assert len(history) == 10

    result = predict_outcome("B", history)
    assert result.interview_probability == 0.32
    assert result.offer_probability == 0.14
    assert result.sample_size == 10


def test_rejected_counts_as_reaching_interview():
    result = predict_outcome(None, _history(REJECTED=1, APPLIED=1))
    assert result.interview_probability == 0.5
    assert result.offer_probability == 0.01


def test_no_response_and_withdrawn_only_count_in_sample():
    result = predict_outcome(None, _history(NO_RESPONSE=2, WITHDRAWN=1, OFFER=1))
    assert result.sample_size == 4
    assert result.interview_probability == 0.25
    assert result.offer_probability == 0.25


def test_all_offers_clamped_high():
    result = predict_outcome("A", _history(OFFER=5))
    assert result == OutcomePrediction(0.99, 0.99, 5)


def test_all_applied_clamped_low():
    result = predict_outcome("B", _history(APPLIED=7))
    assert result == OutcomePrediction(0.01, 0.01, 7)


def test_rating_is_case_sensitive():
    # Only the exact register codes are weighted.
    assert predict_outcome("a", []) == OutcomePrediction(0.15, 0.05, 0)


@pytest.mark.parametrize("rating", ["A", "B", None, "Temporary Worker"])
@pytest.mark.parametrize(
    "history",
    [
        [],
        _history(OFFER=3),
        _history(APPLIED=3),
        _history(INTERVIEW=2, OFFER=1, REJECTED=4, WITHDRAWN=1),
        _history(NO_RESPONSE=9, OFFER=1),
    ],
)
def test_probabilities_always_within_bounds(rating, history):
    result = predict_outcome(rating, history)
    assert 0.01 <= result.interview_probability <= 0.99
    assert 0.01 <= result.offer_probability <= 0.99
    assert result.sample_size == len(history)


def test_predict_route_uses_callers_history_only(users, companies, make_application, client_for):
    user_a, user_b = users
    company_b = companies["B"]
    other = companies["other"]

    for status in _history(INTERVIEW=1, OFFER=2, REJECTED=1, APPLIED=6):
        make_application(user_a, other, status=status)
    # user_b's offers must not leak into user_a's prediction.
    for _ in range(3):
        make_application(user_b, other, status=S.OFFER)

    with client_for(user_a) as c:
        res = c.get(f"/predict/{company_b.id}")
        assert res.status_code == 200
        assert res.json() == {"interviewProbability": 0.32, "offerProbability": 0.14, "sampleSize": 10}

        # Stateless: asking again yields the same answer.
        assert c.get(f"/predict/{company_b.id}").json() == res.json()


def test_predict_route_without_history(client, companies):
    res = client.get(f"/predict/{companies['A'].id}")
    assert res.status_code == 200
    assert res.json() == {"interviewProbability": 0.18, "offerProbability": 0.06, "sampleSize": 0}


def test_predict_route_unknown_company(client):
    res = client.get("/predict/999999")
    assert res.status_code == 404
    assert res.json()["error"] == "NOT_FOUND"
