"""Shared test fixtures for annotationidentity tests."""

import pytest


@pytest.fixture
def active_codes():
    """Fixture providing a small caller-owned set of active currency codes."""
    return frozenset({"USD", "EUR", "GBP", "JPY"})


@pytest.fixture
def sample_units():
    """Fixture providing valid unit payloads covering every grammar feature.

    Includes prefixes, binary literals, τ, groups with exponents,
    negative exponents, and mixed ⋅ and / chains.
    """
    return [
        "m",
        "daN",
        "km⋅s⁻¹⋅A",
        "m/s²",
        "m⋅s⁻²",
        "kg⋅m/s²",
        "(m/s)²",
        "m/(s⋅K)",
        "KiB/s",
        "GiB⋅s⁻¹",
        "τ/s",
        "mol⋅K⁻¹",
        "kW/m²",
        "μs",
        "Ω⋅m",
        "cd⋅sr/m²",
        "s¹²",
        "m/m",
        "km/m",
    ]
