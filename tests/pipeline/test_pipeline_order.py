import pytest

from lighthouse.pipeline import PIPELINE_ORDER, Pipeline


def test_steps_run_in_declared_order():
    seen = []
    handlers = {name: (lambda ctx, n=name: seen.append(n)) for name in PIPELINE_ORDER}
    Pipeline(handlers).run(object())
    assert seen == list(PIPELINE_ORDER)
    assert PIPELINE_ORDER.index("illuminate") < PIPELINE_ORDER.index("navigate") < PIPELINE_ORDER.index("score")


def test_missing_handler_is_rejected():
    with pytest.raises(ValueError, match="navigate"):
        Pipeline({"illuminate": lambda ctx: None}, order=("illuminate", "navigate"))
