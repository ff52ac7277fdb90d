import itertools
from datetime import timedelta

from app.models.payout_request import PayoutRequest
from app.models.reward import Reward
from app.services.clock import utcnow
from app.services.wallet_service import get_cash_balance, get_wallet


LEDGER = [
    (Reward, dict(type="cash", amount=500)),
    (Reward, dict(type="cash", amount=250)),
    (Reward, dict(type="coupon", amount=1000)),
    (PayoutRequest, dict(amount=300, status="completed")),
    (PayoutRequest, dict(amount=100, status="pending")),
]


def test_empty_wallet_is_zero(db, make_partner):
    partner = make_partner()
    assert get_wallet(db, partner.id) == {"cash_balance": 0, "coupons_count": 0}


def test_cash_balance_subtracts_only_completed_payouts(db, make_partner):
    partner = make_partner()
    db.add_all([
        Reward(partner_id=partner.id, type="cash", amount=800),
        PayoutRequest(partner_id=partner.id, amount=100, status="pending"),
        PayoutRequest(partner_id=partner.id, amount=200, status="approved"),
        PayoutRequest(partner_id=partner.id, amount=300, status="rejected"),
        PayoutRequest(partner_id=partner.id, amount=50, status="completed"),
    ])
    db.commit()

    assert get_cash_balance(db, partner.id) == 750


def test_coupons_are_counted_even_when_expired(db, make_partner):
    partner = make_partner()
    db.add_all([
        Reward(partner_id=partner.id, type="coupon", amount=1000, expires_at=utcnow() - timedelta(days=3)),
        Reward(partner_id=partner.id, type="coupon", amount=500),
        Reward(partner_id=partner.id, type="cash", amount=120),
    ])
    db.commit()

    wallet = get_wallet(db, partner.id)
    assert wallet["coupons_count"] == 2
    # coupon amounts never reach the cash balance
    assert wallet["cash_balance"] == 120


def test_wallet_ignores_other_partners(db, make_partner):
    alice = make_partner("alice")
    bob = make_partner("bob")
    db.add_all([
        Reward(partner_id=alice.id, type="cash", amount=400),
        Reward(partner_id=bob.id, type="cash", amount=900),
        PayoutRequest(partner_id=bob.id, amount=900, status="completed"),
    ])
    db.commit()

    assert get_cash_balance(db, alice.id) == 400
    assert get_cash_balance(db, bob.id) == 0


def test_wallet_is_invariant_under_row_order(db, make_partner):
    results = set()
    for i, ordering in enumerate(itertools.permutations(LEDGER)):
        partner = make_partner(f"p{i}")
        for model, fields in ordering:
            db.add(model(partner_id=partner.id, **fields))
            db.commit()
        wallet = get_wallet(db, partner.id)
        results.add((wallet["cash_balance"], wallet["coupons_count"]))

    assert results == {(450, 1)}
