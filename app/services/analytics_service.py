"""
Business-facing reporting over a single survey's responses.

All three views are read-only and computed at query time; respondent
attributes come from the partner's current profile, not a snapshot taken
at submission.
"""

import csv
import io
from collections import Counter, defaultdict
from datetime import date, datetime, time, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.answer import Answer
from app.models.partner_profile import PartnerProfile
from app.models.question import Question
from app.models.survey_response import SurveyResponse
from app.services.clock import utcnow


WINDOW_DAYS = 30
TOP_LOCATIONS = 5

UNKNOWN = "Unknown"
AGE_BUCKETS = ["Under 18", "18-24", "25-34", "35-44", "45-54", "55+", UNKNOWN]


def age_bucket(age) -> str:
    if age is None:
        return UNKNOWN
    if age < 18:
        return "Under 18"
    if age <= 24:
        return "18-24"
    if age <= 34:
        return "25-34"
    if age <= 44:
        return "35-44"
    if age <= 54:
        return "45-54"
    return "55+"


# ============================================================
# RESPONSES OVER TIME
# ============================================================

def get_response_counts(db: Session, survey_id, today: date | None = None) -> dict:
    """Daily response counts for the trailing window ending ``today`` (UTC)."""
    today = today or utcnow().date()
    start = today - timedelta(days=WINDOW_DAYS - 1)

    rows = (
        db.query(SurveyResponse.completed_at)
        .filter(SurveyResponse.survey_id == survey_id)
        .filter(SurveyResponse.completed_at >= datetime.combine(start, time.min))
        .filter(SurveyResponse.completed_at < datetime.combine(today + timedelta(days=1), time.min))
        .all()
    )

    counts = [0] * WINDOW_DAYS
    for (completed_at,) in rows:
        counts[(completed_at.date() - start).days] += 1

    return {
        "dates": [(start + timedelta(days=i)).strftime("%b %d") for i in range(WINDOW_DAYS)],
        "counts": counts,
    }


# ============================================================
# DEMOGRAPHICS
# ============================================================

def _label(value) -> str:
    if isinstance(value, str):
        value = value.strip()
    return value or UNKNOWN


def _respondent_breakdown(db: Session, survey_id, column):
    # outer join: a respondent without a profile still counts, as Unknown
    return (
        db.query(column, func.count(SurveyResponse.id))
        .select_from(SurveyResponse)
        .outerjoin(PartnerProfile, PartnerProfile.user_id == SurveyResponse.partner_id)
        .filter(SurveyResponse.survey_id == survey_id)
        .group_by(column)
        .all()
    )


def _ranked(counter: Counter, limit: int | None = None) -> list[dict]:
    ranked = sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    if limit is not None:
        ranked = ranked[:limit]
    return [{"label": label, "count": n} for label, n in ranked]


def get_demographics(db: Session, survey_id) -> dict:
    ages = Counter(dict.fromkeys(AGE_BUCKETS, 0))
    for age, n in _respondent_breakdown(db, survey_id, PartnerProfile.age):
        ages[age_bucket(age)] += int(n)

    genders = Counter()
    for gender, n in _respondent_breakdown(db, survey_id, PartnerProfile.gender):
        genders[_label(gender)] += int(n)

    locations = Counter()
    for location, n in _respondent_breakdown(db, survey_id, PartnerProfile.location):
        locations[_label(location)] += int(n)

    return {
        "age": [{"label": b, "count": ages[b]} for b in AGE_BUCKETS],
        "gender": _ranked(genders),
        "location": _ranked(locations, limit=TOP_LOCATIONS),
    }


# ============================================================
# CSV EXPORT
# ============================================================

def export_results_csv(db: Session, survey_id) -> str:
    questions = (
        db.query(Question)
        .filter(Question.survey_id == survey_id)
        .order_by(Question.order.asc())
        .all()
    )
    column_of = {q.id: i for i, q in enumerate(questions)}

    responses = (
        db.query(SurveyResponse)
        .filter(SurveyResponse.survey_id == survey_id)
        .order_by(SurveyResponse.completed_at.desc(), SurveyResponse.id.desc())
        .all()
    )

    answers_by_response = defaultdict(list)
    answers = (
        db.query(Answer)
        .join(SurveyResponse, Answer.response_id == SurveyResponse.id)
        .filter(SurveyResponse.survey_id == survey_id)
        .all()
    )
    for a in answers:
        answers_by_response[a.response_id].append(a)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Response ID", "Completed At"] + [q.text for q in questions])

    for r in responses:
        cells = [""] * len(questions)
        for a in answers_by_response.get(r.id, []):
            idx = column_of.get(a.question_id)
            if idx is not None:
                cells[idx] = a.value
        completed_at = r.completed_at.isoformat() if r.completed_at else ""
        writer.writerow([r.id, completed_at] + cells)

    return buf.getvalue()
