"""Builders for small in-memory datasets."""

from datetime import datetime, timedelta

from txflag.models import Dataset, Geotag, Party, Transaction, User

T0 = datetime(2024, 1, 1, 9, 0, 0)

_COORDS = {"US": (40.71, -74.0), "GB": (51.5, -0.12), "FR": (48.85, 2.35)}


def geotag(country="US"):
    lat, lon = _COORDS.get(country, (0.0, 0.0))
    return Geotag(country_code=country, lat=lat, lon=lon)


def tx(
    tx_id,
    payer,
    payee,
    amount,
    minutes=0,
    payer_country="US",
    payee_country="US",
    category="transfer",
    at=None,
):
    """
    Build a transaction ``minutes`` after T0, or at the explicit datetime ``at``.
    Pass a country of None to omit that party's geotag.
    """
    return Transaction(
        transaction_id=tx_id,
        payer=Party(user_id=payer, geotag=geotag(payer_country) if payer_country else None),
        payee=Party(user_id=payee, geotag=geotag(payee_country) if payee_country else None),
        timestamp=at if at is not None else T0 + timedelta(minutes=minutes),
        amount=amount,
        category=category,
    )


def dataset(*transactions):
    user_ids = sorted({p for t in transactions for p in (t.payer.user_id, t.payee.user_id)})
    users = tuple(User(user_id=u, name=u.title(), home=geotag("US")) for u in user_ids)
    return Dataset(users=users, transactions=tuple(transactions))
