"""
Integration tests for the assembled markup pipeline.
"""
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from markup_tool.engine import (
    Category,
    InvalidQuantityError,
    Job,
    MissingStateError,
    Money,
    ParseError,
    PrintSink,
    RateTable,
    RecordingSink,
    build_pipeline,
    run_pipeline,
)

MARKUP_STEPS = ("Flat Markup", "Per Person Markup", "Category Markup")


@pytest.fixture(scope="module")
def pipeline():
    return build_pipeline()


@pytest.mark.parametrize("price, people, category, expected", [
    ("1299.99", 3, Category.FOOD, "1591.58"),
    ("5432.00", 1, Category.PHARMA, "6199.81"),
    ("12456.95", 4, Category.OTHER, "13707.63"),
    ("100", 0, Category.OTHER, "105.00"),
])
def test_run_pipeline_end_to_end(price, people, category, expected):
    job = Job.create(price, people, category)

    result = run_pipeline(job, RateTable())

    assert result is job
    assert str(job.running_price) == expected
    assert str(job.original_price) == price
    assert job.base_price == Money.parse(price).multiply(Decimal("1.05"))


def test_base_price_is_flat_marked_original(pipeline):
    job = pipeline.run(Job.create("1299.99", 3, Category.FOOD))
    assert str(job.base_price) == "1364.9895"


def test_missing_job_is_rejected():
    with pytest.raises(MissingStateError) as exc:
        run_pipeline(None, RateTable())
    assert exc.value.missing == "job"


def test_missing_rates_is_rejected_before_any_stage():
    sink = RecordingSink()
    job = Job.create("100", 2, Category.FOOD)

    with pytest.raises(MissingStateError) as exc:
        run_pipeline(job, None, sink)

    assert exc.value.missing == "rates"
    assert job.base_price == job.original_price
    assert job.running_price == Money.zero()
    assert job.trace == []
    assert sink.jobs == []


@pytest.mark.parametrize("category", list(Category))
@pytest.mark.parametrize("price", ["0", "100", "1299.99"])
def test_negative_headcount_always_fails(pipeline, category, price):
    job = Job.create(price, -1, category)
    with pytest.raises(InvalidQuantityError):
        pipeline.run(job)
    # Flat markup already ran; the job is partially priced
    assert job.base_price == Money.parse(price).multiply(Decimal("1.05"))


def test_failed_job_never_reaches_sink():
    sink = RecordingSink()
    pipeline = build_pipeline(sink=sink)
    with pytest.raises(InvalidQuantityError):
        pipeline.run(Job.create("100", -3, Category.FOOD))
    assert sink.jobs == []


@pytest.mark.parametrize("category", list(Category))
def test_every_category_is_priced_and_rounded(pipeline, category):
    job = pipeline.run(Job.create("12.345", 2, category))
    assert job.running_price.amount.as_tuple().exponent == -2
    assert job.trace[-1].step == "Currency Rounding"


@pytest.mark.parametrize("category", list(Category))
@pytest.mark.parametrize("people", [0, 1, 7])
def test_running_price_never_decreases(pipeline, category, people):
    job = pipeline.run(Job.create("987.654", people, category))

    markups = [Decimal(t.value) for t in job.trace if t.step in MARKUP_STEPS]
    assert len(markups) == 3
    assert job.original_price.amount <= markups[0]
    assert markups == sorted(markups)


@pytest.mark.parametrize("price", ["-100", "-0.01", "-1E+3"])
def test_negative_price_is_rejected(price):
    """A negative price would make every markup stage lower the running price."""
    with pytest.raises(ParseError, match="negative"):
        Job.create(price, 2, Category.FOOD)
    with pytest.raises(ParseError):
        Job(original_price=Money.parse(price))


def test_trace_text_lists_every_stage(pipeline):
    job = pipeline.run(Job.create("1299.99", 3, Category.FOOD))

    assert job.get_trace_text().splitlines() == [
        "→ Flat Markup: 0.05 on 1299.99 = 1364.9895",
        "→ Per Person Markup: 0.012 × 3 people = 1414.1291220",
        "→ Category Markup: 0.13 for FOOD = 1591.5777570",
        "→ Currency Rounding: 2 places, ROUND_HALF_EVEN = 1591.58",
    ]


def test_pipeline_is_reusable_across_jobs(pipeline):
    first = pipeline.run(Job.create("1299.99", 3, Category.FOOD))
    second = pipeline.run(Job.create("5432.00", 1, Category.PHARMA))
    again = pipeline.run(Job.create("1299.99", 3, Category.FOOD))

    assert str(first.running_price) == str(again.running_price) == "1591.58"
    assert str(second.running_price) == "6199.81"


def test_unmapped_category_passes_through(pipeline):
    sink = RecordingSink()
    job = Job.create("100", 1, None)
    build_pipeline(sink=sink).run(job)

    assert job.running_price == Money.parse("106.26")
    assert sink.jobs == []
    assert job.trace[-1].step == "Category Dispatch"


def test_describe_wiring():
    wiring = build_pipeline(sink=PrintSink()).describe()

    assert wiring["entry"] == [
        "ValidateContextStage", "FlatMarkupStage", "PerPersonMarkupStage", "CategoryDispatchStage",
    ]
    for category in Category:
        assert wiring[category.value] == ["CategoryMarkupStage", "RoundCurrencyStage", "PrintSink"]


def test_pipeline_is_immutable(pipeline):
    with pytest.raises(FrozenInstanceError):
        pipeline.rates = RateTable(flat_markup="0.1")


def test_custom_rate_table():
    rates = RateTable(flat_markup="0", per_person_markup="0", category_markups={"FOOD": "0.5"})
    pipeline = build_pipeline(rates)

    assert str(pipeline.run(Job.create("100", 4, Category.FOOD)).running_price) == "150.00"
    assert str(pipeline.run(Job.create("100", 4, Category.PHARMA)).running_price) == "100.00"


# ---------------------------------------------------------------- sinks

def test_print_sink_output(capsys):
    build_pipeline(sink=PrintSink()).run(Job.create("1299.99", 3, Category.FOOD))

    out = capsys.readouterr().out.strip()
    assert out == "Job{Category: FOOD, Price: 1299.99, People: 3, MarkedUpPrice: 1591.58}"


def test_recording_sink_frame():
    sink = RecordingSink()
    pipeline = build_pipeline(sink=sink)
    pipeline.run(Job.create("1299.99", 3, Category.FOOD))
    pipeline.run(Job.create("12456.95", 4, Category.OTHER))

    frame = sink.to_frame()

    assert list(frame.columns) == RecordingSink.COLUMNS
    assert frame['marked_up_price'].tolist() == ["1591.58", "13707.63"]
    assert frame['category'].tolist() == ["FOOD", "OTHER"]


# ---------------------------------------------------------------- rate table

def test_default_rates():
    rates = RateTable()
    assert rates.flat_rate() == Decimal("0.05")
    assert rates.per_person_rate() == Decimal("0.012")
    assert rates.rate_for(Category.FOOD) == Decimal("0.13")
    assert rates.rate_for(Category.PHARMA) == Decimal("0.075")
    assert rates.rate_for(Category.ELECTRONICS) == Decimal("0.02")
    assert rates.rate_for(Category.OTHER) == Decimal("0.0")


def test_unknown_category_gets_other_rate():
    rates = RateTable(category_markups={Category.OTHER: "0.01"})
    assert rates.rate_for(None) == Decimal("0.01")
    assert rates.rate_for(Category.FOOD) == Decimal("0.01")


def test_rate_table_is_read_only():
    rates = RateTable()
    with pytest.raises(FrozenInstanceError):
        rates.flat_markup = Decimal("1")
    with pytest.raises(TypeError):
        rates.category_markups[Category.FOOD] = Decimal("1")


def test_rate_table_rejects_floats_and_negatives():
    with pytest.raises(TypeError):
        RateTable(flat_markup=0.05)
    with pytest.raises(ValueError):
        RateTable(per_person_markup="-0.01")
    with pytest.raises(ParseError):
        RateTable(category_markups={Category.FOOD: "13%"})


def test_category_parse():
    assert Category.parse(" food ") is Category.FOOD
    with pytest.raises(ParseError):
        Category.parse("TOYS")
