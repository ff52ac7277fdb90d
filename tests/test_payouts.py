import pytest

from app.errors import InsufficientBalanceError, InvalidArgumentError, NotFoundError
from app.models.payout_request import PayoutRequest
from app.models.reward import Reward
from app.services.payout_service import list_payouts, request_payout, update_payout_status
from app.services.wallet_service import get_cash_balance


@pytest.fixture
def funded_partner(db, make_partner):
    partner = make_partner()
    db.add(Reward(partner_id=partner.id, type="cash", amount=500))
    db.commit()
    return partner


@pytest.mark.parametrize("amount", [0, -1, None])
def test_non_positive_amount_is_invalid(db, funded_partner, amount):
    with pytest.raises(InvalidArgumentError):
        request_payout(db, funded_partner.id, amount)


def test_payout_above_balance_is_rejected_and_balance_unchanged(db, funded_partner):
    with pytest.raises(InsufficientBalanceError):
        request_payout(db, funded_partner.id, 1000)
    db.rollback()

    assert get_cash_balance(db, funded_partner.id) == 500
    assert db.query(PayoutRequest).count() == 0


def test_payout_within_balance_is_pending(db, funded_partner):
    payout = request_payout(db, funded_partner.id, 500)
    db.commit()

    assert payout.status == "pending"
    assert payout.amount == 500
    # pending payouts leave the balance alone
    assert get_cash_balance(db, funded_partner.id) == 500
    assert [p.id for p in list_payouts(db, funded_partner.id)] == [payout.id]


def test_completed_payout_reduces_balance(db, funded_partner):
    payout = request_payout(db, funded_partner.id, 200)
    db.commit()

    update_payout_status(db, payout.id, "approved")
    update_payout_status(db, payout.id, "completed")
    db.commit()

    assert payout.processed_at is not None
    assert get_cash_balance(db, funded_partner.id) == 300

    with pytest.raises(InsufficientBalanceError):
        request_payout(db, funded_partner.id, 301)


@pytest.mark.parametrize(
    "path",
    [
        ["rejected", "completed"],
        ["completed", "pending"],
        ["approved", "pending"],
    ],
)
def test_final_and_backward_transitions_are_refused(db, funded_partner, path):
    payout = request_payout(db, funded_partner.id, 100)
    db.commit()

    update_payout_status(db, payout.id, path[0])
    with pytest.raises(InvalidArgumentError):
        update_payout_status(db, payout.id, path[1])


def test_unknown_payout_is_not_found(db):
    with pytest.raises(NotFoundError):
        update_payout_status(db, 42, "approved")


def test_completing_second_payout_beyond_balance_is_refused(db, funded_partner):
    first = request_payout(db, funded_partner.id, 500)
    second = request_payout(db, funded_partner.id, 500)
    db.commit()

    update_payout_status(db, first.id, "completed")
    db.commit()

    with pytest.raises(InsufficientBalanceError):
        update_payout_status(db, second.id, "completed")
    db.rollback()

    assert db.get(PayoutRequest, second.id).status == "pending"
    assert get_cash_balance(db, funded_partner.id) == 0


def test_approved_payouts_reserve_the_balance(db, funded_partner):
    first = request_payout(db, funded_partner.id, 300)
    second = request_payout(db, funded_partner.id, 300)
    db.commit()

    update_payout_status(db, first.id, "approved")
    db.commit()

    with pytest.raises(InsufficientBalanceError):
        update_payout_status(db, second.id, "approved")
    db.rollback()

    # the approved payout still completes against its own reservation
    update_payout_status(db, first.id, "completed")
    db.commit()
    assert get_cash_balance(db, funded_partner.id) == 200
