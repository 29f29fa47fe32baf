"""Tests for format_range."""

from __future__ import annotations

import pytest

from uritemplates import Template, UnboundedRangeError, format_range


class TestFormatRange:
    """Tests for enumerating the names covering a range."""

    def test_yearly(self) -> None:
        """Four years touched by the range give four names."""
        assert format_range("data_$Y.dat", "2001-03-22", "2004-08-18") == [
            "data_2001.dat",
            "data_2002.dat",
            "data_2003.dat",
            "data_2004.dat",
        ]

    def test_monthly_across_year(self) -> None:
        """The first name is the month containing the start."""
        names = list(Template("$Y$m").format_range("2001-11-20", "2002-02-01"))
        assert names == ["200111", "200112", "200201"]

    def test_daily(self) -> None:
        """Daily names across a year boundary."""
        assert format_range("$Y$m$d", "2019-12-30", "2020-01-02") == [
            "20191230",
            "20191231",
            "20200101",
        ]

    def test_empty_range(self) -> None:
        """start == stop on a boundary yields nothing."""
        assert format_range("$Y", "2001-01-01", "2001-01-01") == []

    def test_stop_is_exclusive(self) -> None:
        """A span starting at the stop is not included."""
        assert format_range("$Y$j", "2000-365", "2000-366") == ["2000365"]

    def test_end_fields(self) -> None:
        """Each span is formatted with its own stop."""
        assert format_range("$Y$m$d-$(Y;end)$m$d", "2013-02-02", "2013-02-04") == [
            "20130202-20130203",
            "20130203-20130204",
        ]

    def test_day_delta(self) -> None:
        """delta steps several days and aligns to the delta grid."""
        assert format_range("$Y$m$(d;delta=5)", "2013-02-07", "2013-02-17") == [
            "20130206",
            "20130211",
            "20130216",
        ]

    def test_shifted_day(self) -> None:
        """Each name is its span's start moved back by the shift, across a month end."""
        names = list(Template("$Y$m$(d;shift=1)").format_range("2013-01-30", "2013-02-03"))
        assert names == ["20130129", "20130130", "20130131", "20130201"]

    def test_phasestart_buckets(self) -> None:
        """Bucket indices run from the bucket containing the start."""
        spec = "$(d;delta=10;phasestart=2000-01-01)"
        assert format_range(spec, "2000-01-15", "2000-02-01") == ["1", "2", "3"]

    def test_hrinterval(self) -> None:
        """Quarter-day names."""
        spec = "$Y$m$d_$(hrinterval;names=a,b,c,d)"
        assert format_range(spec, "2012-01-17T05:00", "2012-01-17T13:00") == [
            "20120117_a",
            "20120117_b",
            "20120117_c",
        ]

    def test_periodic(self) -> None:
        """Periodic names start at the period containing the start."""
        spec = "$(periodic;offset=0;start=2000-001;period=P1D)"
        assert format_range(spec, "2000-01-03T12:00", "2000-01-06") == ["2", "3", "4"]

    def test_subsec(self) -> None:
        """Tenths of a second."""
        spec = "$H$M$S.$(subsec;places=1)"
        assert format_range(spec, "2012-01-17T02:00:00.15", "2012-01-17T02:00:00.45") == [
            "020000.1",
            "020000.2",
            "020000.3",
            "020000.4",
        ]

    def test_restartable(self) -> None:
        """Each call starts over."""
        t = Template("$Y")
        assert list(t.format_range("2001-01-01", "2003-01-01")) == ["2001", "2002"]
        assert list(t.format_range("2001-01-01", "2003-01-01")) == ["2001", "2002"]

    def test_accepts_decomposed_times(self) -> None:
        """DecomposedTime bounds work like strings."""
        from uritemplates import DecomposedTime

        names = list(Template("$Y").format_range(DecomposedTime(2001, 6), DecomposedTime(2002, 6)))
        assert names == ["2001", "2002"]


class TestUnbounded:
    """Tests for templates that cannot be enumerated."""

    def test_no_spanning_field(self) -> None:
        """Enums alone do not divide time; the error is raised on the call."""
        t = Template("$(enum;values=a,b)")
        with pytest.raises(UnboundedRangeError):
            t.format_range("2000-01-01", "2000-01-02")

    def test_zero_period(self) -> None:
        """A zero-length period cannot advance."""
        with pytest.raises(UnboundedRangeError):
            format_range("$(periodic;start=2000-001;period=PT0S)", "2000-01-01", "2000-01-02")
