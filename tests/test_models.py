import pytest
from pydantic import ValidationError

from plantkeeper.models.garden import CareSchedule, CareType, SunExposure, get_sun_exposure_label

from helpers import make_plant


@pytest.mark.parametrize("key, label", [
    ("full_sun", "Full Sun"),
    ("partial_sun", "Partial Sun"),
    ("partial_shade", "Partial Shade"),
    ("full_shade", "Full Shade"),
])
def test_sun_exposure_labels(key, label):
    assert get_sun_exposure_label(key) == label
    assert SunExposure(key).label == label


def test_unknown_exposure_spaces_first_underscore_only():
    assert get_sun_exposure_label("unknown_exposure") == "unknown exposure"
    assert get_sun_exposure_label("multiple_under_scores") == "multiple under_scores"


def test_care_type_labels():
    assert CareType.WATER.label == "Water"
    assert CareType.FERTILIZER.label == "Fertilizer"
    assert [t.value for t in CareType] == ["water", "fertilizer"]


def test_schedule_frequency_must_not_be_negative():
    with pytest.raises(ValidationError):
        CareSchedule(frequency_days=-1)
    assert CareSchedule(frequency_days=0).is_active is True


def test_plant_defaults():
    plant = make_plant()

    assert plant.last_watered is None
    assert plant.last_fertilized is None
    assert plant.variety is None
