import pytest

from custom_components.recipe_importer.models.recipe import MetricQuantity
from custom_components.recipe_importer.unit_converter import (
    format_metric,
    format_quantity,
    is_converted,
    normalize_unit,
    to_metric,
)


def test_cup_to_milliliters():
    metric = to_metric(1, "cup")

    assert metric.unit == "ml"
    assert metric.amount == pytest.approx(236.59)
    assert format_metric(metric.amount, metric.unit) == "237 ml"


def test_kilograms_to_grams():
    metric = to_metric(2, "kg")

    assert metric == MetricQuantity(amount=2000, unit="g")
    assert format_metric(metric.amount, metric.unit) == "2 kg"


@pytest.mark.parametrize(
    ("amount", "unit", "expected_amount", "expected_unit"),
    [
        (2, "Cups", 473.18, "ml"),
        (14, "fl oz", 413.98, "ml"),
        (1, "Fl Oz", 29.57, "ml"),
        (1, "fl. oz", 29.57, "ml"),
        (2, "tbsp", 30, "ml"),
        (3, "tsp", 15, "ml"),
        (1, "Pints", 473.18, "ml"),
        (1, "quart", 946.35, "ml"),
        (1, "gal", 3785.41, "ml"),
        (1.5, "Liters", 1500, "ml"),
        (2.75, "oz", 77.9625, "g"),
        (1, "Ounces", 28.35, "g"),
        (1, "LBS", 453.59, "g"),
        (2, "pound", 907.18, "g"),
    ],
)
def test_imperial_units(amount, unit, expected_amount, expected_unit):
    metric = to_metric(amount, unit)

    assert metric.unit == expected_unit
    assert metric.amount == pytest.approx(expected_amount)


@pytest.mark.parametrize("unit", ["g", "ml"])
def test_metric_units_are_left_alone(unit):
    metric = to_metric(250, unit)

    assert metric == MetricQuantity(amount=250, unit=unit)
    assert not is_converted(unit, metric)


@pytest.mark.parametrize(
    ("amount", "unit", "expected"),
    [
        (2, "x 400g cans", MetricQuantity(amount=800, unit="g")),
        (1, "(500ml) bottle", MetricQuantity(amount=500, unit="ml")),
        (3, "x 1kg bags", MetricQuantity(amount=3000, unit="g")),
    ],
)
def test_pack_sizes(amount, unit, expected):
    assert to_metric(amount, unit) == expected


@pytest.mark.parametrize("unit", ["pinch", "whole", "cloves", "Large"])
def test_unknown_units_pass_through(unit):
    metric = to_metric(3, unit)

    assert metric == MetricQuantity(amount=3, unit=unit)
    assert not is_converted(unit, metric)


def test_empty_unit_passes_through():
    assert to_metric(2, "") == MetricQuantity(amount=2, unit="")


def test_normalize_unit():
    assert normalize_unit(" Cups ") == "cup"
    assert normalize_unit("LBS") == "lb"
    assert normalize_unit("g") == "g"


@pytest.mark.parametrize(
    ("amount", "unit", "expected"),
    [
        (1234567, "g", "1,234.57 kg"),
        (1500, "ml", "1.5 L"),
        (1000, "ml", "1 L"),
        (12.5, "g", "13 g"),
        (10, "g", "10 g"),
        (413.98, "ml", "414 ml"),
        (7.5, "ml", "7.5 ml"),
        (5, "g", "5 g"),
        (3, "pinch", "3 pinch"),
        (5, "", "5"),
    ],
)
def test_format_metric(amount, unit, expected):
    assert format_metric(amount, unit) == expected


@pytest.mark.parametrize(
    ("quantity", "expected"),
    [
        (2.0, "2"),
        (2.5, "2.5"),
        (1.333, "1.33"),
        (0, "0"),
        (None, ""),
    ],
)
def test_format_quantity(quantity, expected):
    assert format_quantity(quantity) == expected
