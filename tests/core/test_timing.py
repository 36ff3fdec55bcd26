"""
Tests for Timer, timed() and tolerance tier selection.
"""

import pytest

from pyols.core.compute import Timer, timed
from pyols.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('solve'):
            pass
        with timer.section('solve'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'solve'}
        assert result['total_seconds'] >= result['solve'] >= 0.0

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_timed_context(self):
        with timed() as timer:
            pass
        assert timer.result()['total_seconds'] >= 0.0


class TestSelectTolerance:

    def test_well_conditioned(self):
        assert select_tolerance(1e3) is CPU_FP64

    def test_ill_conditioned(self):
        assert select_tolerance(1e12) is CPU_FP64_ILL_CONDITIONED
