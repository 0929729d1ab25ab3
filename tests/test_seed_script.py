"""
Tests for the --brands option of scripts/seed_reference_data.py
"""

from sqlalchemy import select

from closet_worthy.models import Brand
from scripts import seed_reference_data


def test_parse_brand_names_drops_blanks_and_repeats():
    assert seed_reference_data.parse_brand_names(" Agolde, ,Khaite,agolde,") == ["Agolde", "Khaite"]


async def test_seed_brands_skips_existing(monkeypatch, session_maker, reference_data, capsys):
    monkeypatch.setattr(seed_reference_data, "async_session_maker", session_maker)

    await seed_reference_data.seed_brands(["Agolde", "Khaite", "Toteme"])

    async with session_maker() as session:
        names = (await session.execute(select(Brand.name).order_by(Brand.name))).scalars().all()
    assert names == ["Agolde", "Isabel Marant Étoile", "Khaite", "Toteme"]

    output = capsys.readouterr().out
    assert "[SKIP] Brand: Agolde" in output
    assert "Added: 2" in output
