import pytest

from app.errors import NotFoundError
from app.models.question import Question
from app.models.survey_response import SurveyResponse
from app.services.eligibility_service import get_available_surveys


def _ids(surveys):
    return [s["id"] for s in surveys]


def test_lists_active_open_surveys_with_question_count(db, make_partner, make_business, make_survey, future):
    partner = make_partner()
    business = make_business()
    open_ended = make_survey(business, title="Open")
    dated = make_survey(business, title="Dated", expires_at=future, max_responses=10, questions=("Only one",))

    surveys = get_available_surveys(db, partner.id)

    assert _ids(surveys) == [open_ended.id, dated.id]
    assert surveys[0]["question_count"] == 2
    assert surveys[1]["question_count"] == 1


@pytest.mark.parametrize("status", ["draft", "completed"])
def test_excludes_inactive_surveys(db, make_partner, make_business, make_survey, status):
    partner = make_partner()
    make_survey(make_business(), status=status)

    assert get_available_surveys(db, partner.id) == []


def test_excludes_surveys_already_answered(db, make_partner, make_business, make_survey):
    alice = make_partner("alice")
    bob = make_partner("bob")
    survey = make_survey(make_business())
    db.add(SurveyResponse(survey_id=survey.id, partner_id=alice.id))
    db.commit()

    assert get_available_surveys(db, alice.id) == []
    assert _ids(get_available_surveys(db, bob.id)) == [survey.id]


def test_excludes_full_surveys(db, make_partner, make_business, make_survey):
    partner = make_partner()
    survey = make_survey(make_business(), max_responses=3)
    survey.response_count = 3
    db.commit()

    assert get_available_surveys(db, partner.id) == []


def test_excludes_expired_surveys_even_if_active(db, make_partner, make_business, make_survey, past):
    partner = make_partner()
    make_survey(make_business(), expires_at=past, status="active")

    assert get_available_surveys(db, partner.id) == []


def test_survey_without_questions_has_zero_count(db, make_partner, make_business, make_survey):
    partner = make_partner()
    make_survey(make_business(), questions=())

    [survey] = get_available_surveys(db, partner.id)
    assert survey["question_count"] == 0


def test_question_count_is_per_survey(db, make_partner, make_business, make_survey):
    partner = make_partner()
    business = make_business()
    first = make_survey(business, questions=("a",))
    make_survey(business, questions=("b", "c", "d"))
    db.add(Question(survey_id=first.id, text="e", type="rating", order=2))
    db.commit()

    counts = [s["question_count"] for s in get_available_surveys(db, partner.id)]
    assert counts == [2, 3]


def test_requires_a_partner_account(db, make_business):
    business = make_business()

    with pytest.raises(NotFoundError):
        get_available_surveys(db, business.id)

    with pytest.raises(NotFoundError):
        get_available_surveys(db, 9999)
