"""Tests for Template.format."""

from __future__ import annotations

import pytest

from uritemplates import DecomposedTime, Template, parse_time_range


FORMAT_CASES = [
    ("$Y$m$d-$(Y;end)$m$d", "20130202-20140303", "2013-02-02/2014-03-03"),
    ("$Y$m$d-$(Y;end)$m$(d;shift=1)", "20130202-20140303", "2013-02-02/2014-03-04"),
    ("$Y$m$d-$(d;end)", "20130202-13", "2013-02-02/2013-02-13"),
    ("$(periodic;offset=0;start=2000-001;period=P1D)", "0", "2000-001/P1D"),
    ("$(periodic;offset=0;start=2000-001;period=P1D)", "20", "2000-021/P1D"),
    ("$(periodic;offset=2285;start=2000-346;period=P27D)", "1", "1832-02-08/P27D"),
    ("$(periodic;offset=2285;start=2000-346;period=P27D)", "2286", "2001-007/P27D"),
    ("$(j;Y=2012)$(hrinterval;names=01,02,03,04)", "01702", "2012-01-17T06:00/PT12H"),
    (
        "$(j;Y=2012).$H$M$S.$(subsec;places=3)",
        "017.020000.245",
        "2012-01-17T02:00:00.245/2012-01-17T02:00:00.246",
    ),
    ("$(j;Y=2012)$(hrinterval;names=01,02,03,04)", "01702", "2012-01-17T06:00/2012-01-17T18:00"),
    ("$-1Y $-1m $-1d $H$M", "2012 3 30 1620", "2012-03-30T16:20/2012-03-30T16:21"),
    ("$Y", "2012", "2012-01-01T00:00/2013-01-01T00:00"),
    ("$Y-$j", "2012-017", "2012-01-17T00:00/2012-01-18T00:00"),
    ("$(j,Y=2012)", "017", "2012-01-17T00:00/2012-01-18T00:00"),
]


@pytest.mark.parametrize("spec,expected,time_range", FORMAT_CASES)
def test_format_table(spec: str, expected: str, time_range: str) -> None:
    """Each range formats to its expected name."""
    r = parse_time_range(time_range)
    assert Template(spec).format(r.start, r.stop) == expected


# =============================================================================
# Calendar fields
# =============================================================================


class TestCalendarFields:
    """Tests for rendering calendar components."""

    def test_padding(self) -> None:
        """Fixed widths are zero padded."""
        assert Template("$Y$m$d$H$M$S").format("2005-01-03T04:05:06") == "20050103040506"

    def test_explicit_width(self) -> None:
        """$3d pads to three digits."""
        assert Template("$Y_$3d").format("2005-01-03") == "2005_003"

    def test_two_digit_year(self) -> None:
        """$y keeps the last two digits."""
        t = Template("$y$m")
        assert t.format("1999-12-01") == "9912"
        assert t.format("2005-01-01") == "0501"

    def test_month_name(self) -> None:
        """$b writes the English abbreviation."""
        assert Template("$d$b$Y").format("2012-03-30") == "30Mar2012"

    def test_day_of_year(self) -> None:
        """$j counts from January 1."""
        t = Template("$Y$j")
        assert t.format("2000-12-31") == "2000366"
        assert t.format("2001-12-31") == "2001365"

    def test_shift_on_start(self) -> None:
        """shift moves the whole start back before any field is written."""
        assert Template("$Y$m$(d;shift=1)").format("2013-03-05") == "20130304"
        assert Template("$Y$m$(d;shift=1)").format("2013-03-01") == "20130228"

    def test_shift_on_stop_crosses_month(self) -> None:
        """Every stop field is written from the same shifted stop."""
        t = Template("$Y$m$d-$(Y;end)$m$(d;shift=1)")
        assert t.format("2013-01-31", "2013-02-01") == "20130131-20130131"
        assert t.parse("20130131-20130131").range == parse_time_range("2013-01-31/2013-02-01")

    def test_unnormalized_input(self) -> None:
        """Decomposed times are normalized before rendering."""
        assert Template("$Y$m$d").format(DecomposedTime(2000, 1, 45)) == "20000214"

    def test_default_stop(self) -> None:
        """Without a stop, the stop is the start plus the natural span."""
        assert Template("$Y$m$d-$(d;end)").format("2013-02-02") == "20130202-03"

    def test_phasestart_bucket(self) -> None:
        """phasestart fields render the bucket index."""
        t = Template("$(d;delta=10;phasestart=2000-01-01)")
        assert t.format("2000-01-01") == "0"
        assert t.format("2000-02-05") == "3"

    def test_parse_of_format(self) -> None:
        """Formatting then parsing returns the same start."""
        t = Template("ace_mag_$Y_$j_to_$(Y;end)_$j.cdf")
        name = t.format("2005-001", "2005-003")
        assert name == "ace_mag_2005_001_to_2005_003.cdf"
        assert t.parse(name).range == parse_time_range("2005-001/2005-003")


# =============================================================================
# Non-time fields
# =============================================================================


class TestNonTimeFields:
    """Tests for enums, versions and wildcards."""

    def test_enum_default(self) -> None:
        """Enums default to their first value."""
        assert Template("$Y$m$d-$(enum;values=a,b,c,d)").format("2013-02-02") == "20130202-a"

    def test_enum_from_extra(self) -> None:
        """Enums read their value from extra by id."""
        t = Template("$Y_sc$(enum;values=a,b,c,d;id=sc)")
        assert t.format("2003-01-01", extra={"sc": "d"}) == "2003_scd"

    def test_unnamed_enum_from_day_offset(self) -> None:
        """An unnamed enum without day fields is read from the days past the span start."""
        t = Template("$Y-$(enum;values=a,b,c)")
        assert t.format("2012-01-02", "2013-01-02") == "2012-b"
        assert t.format("2012-01-01") == "2012-a"

    def test_unnamed_enum_from_extra(self) -> None:
        """A value in extra wins, and its offset is taken off the start."""
        t = Template("$Y-$(enum;values=a,b,c)")
        assert t.format("2012-01-03", extra={"enum": "c"}) == "2012-c"
        assert t.format("2013-01-01", extra={"enum": "b"}) == "2012-b"

    def test_version_default(self) -> None:
        """Versions default to 1."""
        assert Template("$Y_v$v.dat").format("2012-01-01") == "2012_v1.dat"

    def test_version_from_extra(self) -> None:
        """Versions read their value from extra."""
        t = Template("$Y_$m_v$v.dat")
        assert t.format("2003-10-01", extra={"v": "20.3"}) == "2003_10_v20.3.dat"

    def test_wildcard_stand_ins(self) -> None:
        """Wildcards without a value render x, y, z in turn."""
        t = Template("$(j;Y=2012).$x.$X.$(ignore).$H")
        assert t.format("2012-01-17T02:00") == "017.x.y.z.02"

    def test_star_wildcards(self) -> None:
        """Legacy * wildcards render the same stand-ins."""
        assert Template("$(j;Y=2012).*.*.*.$H").format("2012-01-17T02:00") == "017.x.y.z.02"

    def test_named_wildcard_from_extra(self) -> None:
        """A wildcard with an id reads its value from extra."""
        t = Template("$Y_$(x;id=site).dat")
        assert t.format("2003-01-01", extra={"site": "kiruna"}) == "2003_kiruna.dat"
        assert t.format("2003-01-01") == "2003_x.dat"


# =============================================================================
# Periodic fields
# =============================================================================


class TestPeriodic:
    """Tests for rendering periodic counts."""

    def test_floors_inside_period(self) -> None:
        """A time inside a period renders that period's index."""
        t = Template("$(periodic;offset=0;start=2000-001;period=P1D)")
        assert t.format("2000-01-21T18:00") == "20"

    def test_monthly_period(self) -> None:
        """Calendar periods count whole months from the start."""
        t = Template("$(periodic;start=2000-01-15;period=P1M)")
        assert t.format("2000-03-14") == "1"
        assert t.format("2000-03-15") == "2"

    def test_before_start(self) -> None:
        """Times before the start give negative counts."""
        t = Template("$(periodic;start=2000-001;period=P1D)")
        assert t.format("1999-12-31") == "-1"

    def test_mixed_period(self) -> None:
        """Periods mixing months and days cannot be counted."""
        from uritemplates import NonIntegralPeriodError

        t = Template("$(periodic;start=2000-001;period=P1M1D)")
        with pytest.raises(NonIntegralPeriodError):
            t.format("2000-03-01")

    def test_zero_period(self) -> None:
        """A zero period cannot be counted."""
        from uritemplates import NonIntegralPeriodError

        t = Template("$(periodic;start=2000-001;period=PT0S)")
        with pytest.raises(NonIntegralPeriodError):
            t.format("2000-03-01", "2000-03-02")


def test_malformed_time_string() -> None:
    """Time strings are decomposed, and bad ones rejected."""
    from uritemplates import MalformedTimeError

    with pytest.raises(MalformedTimeError):
        Template("$Y").format("20x1")
