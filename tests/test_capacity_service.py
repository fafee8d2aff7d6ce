import pytest

from services.capacity_service import (
    UNLIMITED,
    RackType,
    height_for,
    max_level_for,
    max_weight_for,
    normalize_level,
    parse_rack_type,
)
from services.exceptions import ConfigurationError


def test_ground_level_is_unlimited_for_every_rack_type():
    for rack_type in RackType:
        assert max_weight_for("0", rack_type) is UNLIMITED
        assert height_for("0", rack_type) == 0.0


def test_standard_profile_weights():
    assert max_weight_for("1", "standard") == 1500
    assert max_weight_for("2", "standard") == 1000
    assert max_weight_for("3", "standard") == 750
    assert max_weight_for("4", "standard") == 500


def test_heights_grow_with_level():
    heights = [height_for(level, RackType.STANDARD) for level in ("1", "2", "3", "4")]
    assert heights == sorted(heights)
    assert height_for(1, "standard") == 2.5


def test_rack_type_is_case_insensitive():
    assert parse_rack_type(" Heavy-Duty ") is RackType.HEAVY_DUTY
    assert max_weight_for("1", "HEAVY-DUTY") == 3000


def test_unknown_rack_type_raises_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        max_weight_for("1", "mezzanine")
    assert exc.value.code == "CONFIGURATION_ERROR"
    assert exc.value.rack_type == "mezzanine"


def test_unknown_rack_type_fails_even_for_ground():
    with pytest.raises(ConfigurationError):
        max_weight_for("0", "mezzanine")


def test_level_outside_profile_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        max_weight_for("7", "standard")
    with pytest.raises(ConfigurationError):
        height_for("x", "standard")


def test_normalize_level():
    assert normalize_level(0) == "0"
    assert normalize_level(" 02 ") == "2"


def test_max_level_for():
    assert max_level_for("cantilever") == 4
