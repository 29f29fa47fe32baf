"""Tests for template compilation.

These tests verify field scanning, widths, qualifier validation, the
propagation of ``end`` and the choice of the natural field.
"""

from __future__ import annotations

import pytest


def _field(spec: str, index: int = 0):
    from uritemplates import Template

    return Template(spec).fields[index]


# =============================================================================
# Tokens
# =============================================================================


class TestScan:
    """Tests for splitting templates into tokens."""

    def test_literals_and_fields(self) -> None:
        """Literal text and fields alternate in order."""
        from uritemplates.template import Field, Literal, Template

        tokens = Template("data_$Y_$j.dat").tokens
        assert [type(t) for t in tokens] == [Literal, Field, Literal, Field, Literal]
        assert tokens[0] == Literal("data_")
        assert tokens[-1] == Literal(".dat")

    def test_field_kinds(self) -> None:
        """Each field gets its kind."""
        from uritemplates.template import FieldKind, Template

        kinds = [f.kind for f in Template("$Y$y$m$b$d$j$H$M$S").fields]
        assert kinds == [
            FieldKind.YEAR,
            FieldKind.YEAR_2DIGIT,
            FieldKind.MONTH,
            FieldKind.MONTH_NAME,
            FieldKind.DAY,
            FieldKind.DAY_OF_YEAR,
            FieldKind.HOUR,
            FieldKind.MINUTE,
            FieldKind.SECOND,
        ]

    @pytest.mark.parametrize("name", ["x", "X", "ignore", "*"])
    def test_wildcard_aliases(self, name: str) -> None:
        """All wildcard spellings compile to the same kind."""
        from uritemplates.template import FieldKind

        spec = f"$({name})" if len(name) > 1 else f"${name}"
        assert _field(spec).kind is FieldKind.WILDCARD

    def test_version_alias(self) -> None:
        """$(version) is $v."""
        from uritemplates.template import FieldKind

        assert _field("$(version)").kind is FieldKind.VERSION

    def test_source_kept(self) -> None:
        """Each field remembers how it was written."""
        assert _field("a$(j;Y=2012)b").source == "$(j;Y=2012)"

    def test_dollar_without_field(self) -> None:
        """A trailing $ is not a field."""
        from uritemplates import Template, TemplateCompileError

        with pytest.raises(TemplateCompileError):
            Template("data_$")

    @pytest.mark.parametrize("spec", ["$Q", "$(foo)", "$(o;id=rbspa-pp)"])
    def test_unknown_field(self, spec: str) -> None:
        """Names outside the field set raise UnknownFieldError."""
        from uritemplates import Template, UnknownFieldError

        with pytest.raises(UnknownFieldError):
            Template(spec)


# =============================================================================
# Widths
# =============================================================================


class TestWidths:
    """Tests for field widths."""

    @pytest.mark.parametrize(
        "spec,width",
        [("$Y", 4), ("$y", 2), ("$m", 2), ("$b", 3), ("$d", 2), ("$j", 3), ("$H", 2), ("$M", 2), ("$S", 2)],
    )
    def test_defaults(self, spec: str, width: int) -> None:
        """Calendar fields have their customary widths."""
        assert _field(spec).width == width

    def test_explicit_width(self) -> None:
        """$3d is three characters wide."""
        assert _field("$3d").width == 3

    def test_variable_width(self) -> None:
        """A negative width means variable and unpadded."""
        assert _field("$-1Y").width is None

    def test_zero_width_rejected(self) -> None:
        """Width zero is an error."""
        from uritemplates import Template, TemplateCompileError

        with pytest.raises(TemplateCompileError):
            Template("$0Y")

    def test_subsec_width(self) -> None:
        """subsec is as wide as its places."""
        assert _field("$(subsec;places=3)").width == 3

    def test_enum_uniform_width(self) -> None:
        """Enums whose values share a length have that width."""
        assert _field("$(enum;values=a,b,c)").width == 1
        assert _field("$(enum;values=a,bb)").width is None

    def test_hrinterval_width(self) -> None:
        """hrinterval names of one length fix the width."""
        assert _field("$(hrinterval;names=01,02,03,04)").width == 2

    def test_open_ended_fields(self) -> None:
        """Versions, wildcards and periodic counts are variable."""
        assert _field("$v").width is None
        assert _field("$x").width is None
        assert _field("$(periodic;start=2000-001;period=P1D)").width is None

    def test_phasestart_day_is_variable(self) -> None:
        """A bucket index has no fixed width."""
        assert _field("$(d;delta=10;phasestart=2000-01-01)").width is None


# =============================================================================
# Qualifiers
# =============================================================================


class TestQualifiers:
    """Tests for qualifier parsing and validation."""

    def test_calendar_qualifiers(self) -> None:
        """shift and delta are read as integers."""
        q = _field("$(d;shift=1;delta=2)").qualifiers
        assert q.shift == 1
        assert q.delta == 2
        assert q.phasestart is None

    def test_phasestart(self) -> None:
        """phasestart is read as a time."""
        q = _field("$(j;delta=7;phasestart=2000-001)").qualifiers
        assert q.phasestart.as_tuple() == (2000, 1, 1, 0, 0, 0, 0)

    def test_constants(self) -> None:
        """Y=2012 seeds the start year; j=17 seeds month 1, day 17."""
        assert _field("$(j;Y=2012)").constants == ((0, 2012),)
        assert _field("$(H;Y=2012;j=17)").constants == ((0, 2012), (1, 1), (2, 17))

    def test_comma_separated(self) -> None:
        """Commas work where there are no semicolons."""
        f = _field("$(enum,values=a,b,c,id=sc)")
        assert f.qualifiers.values == ("a", "b", "c")
        assert f.qualifiers.id == "sc"

    def test_enum_default_id(self) -> None:
        """Enums without an id record under 'enum'."""
        assert _field("$(enum;values=a,b)").qualifiers.id == "enum"

    def test_periodic(self) -> None:
        """start, period and offset."""
        from uritemplates import Duration

        q = _field("$(periodic;offset=2285;start=2000-346;period=P27D)").qualifiers
        assert q.start.as_tuple() == (2000, 12, 11, 0, 0, 0, 0)
        assert q.period == Duration(days=27)
        assert q.offset == 2285

    def test_version_flags(self) -> None:
        """sep and alpha take no value."""
        q = _field("$(v;id=ver;sep)").qualifiers
        assert (q.id, q.sep, q.alpha) == ("ver", True, False)

    def test_wildcard_id(self) -> None:
        """A wildcard may name its capture."""
        assert _field("$(x;id=sc)").qualifiers.id == "sc"

    @pytest.mark.parametrize(
        "spec,qualifier",
        [
            ("$(Y;bogus=1)", "bogus"),
            ("$(enum;values=a,b;end)", "end"),
            ("$(v;places=3)", "places"),
            ("$(H;delta=2;phasestart=2000-001)", "phasestart"),
        ],
    )
    def test_unknown_qualifier(self, spec: str, qualifier: str) -> None:
        """Qualifiers a kind does not take are rejected by name."""
        from uritemplates import Template, UnknownQualifierError

        with pytest.raises(UnknownQualifierError) as info:
            Template(spec)
        assert info.value.qualifier == qualifier

    @pytest.mark.parametrize(
        "spec,qualifier",
        [
            ("$(subsec)", "places"),
            ("$(enum)", "values"),
            ("$(periodic;start=2000-001)", "period"),
            ("$(periodic;period=P1D)", "start"),
            ("$(hrinterval)", "names"),
            ("$(d;phasestart=2000-001)", "delta"),
        ],
    )
    def test_missing_qualifier(self, spec: str, qualifier: str) -> None:
        """Required qualifiers are reported by name."""
        from uritemplates import MissingQualifierError, Template

        with pytest.raises(MissingQualifierError) as info:
            Template(spec)
        assert info.value.qualifier == qualifier

    @pytest.mark.parametrize(
        "spec",
        [
            "$(subsec;places=0)",
            "$(subsec;places=10)",
            "$(d;delta=0)",
            "$(Y;shift=one)",
            "$(j;Y=abc)",
            "$(periodic;start=2000-001;period=1D)",
            "$(periodic;start=yesterday;period=P1D)",
            "$(hrinterval;names=a,b,c,d,e,f,g)",
            "$(enum;values=a,,b)",
            "$(enum;values=)",
        ],
    )
    def test_invalid_values(self, spec: str) -> None:
        """Malformed qualifier values fail compilation."""
        from uritemplates import Template, TemplateCompileError

        with pytest.raises(TemplateCompileError):
            Template(spec)


# =============================================================================
# end
# =============================================================================


class TestEnd:
    """Tests for stop-time fields."""

    def test_end_propagates(self) -> None:
        """Calendar fields after an end field read the stop time."""
        from uritemplates import Template

        fields = Template("$Y$m$d-$(Y;end)$m$d").fields
        assert [f.end for f in fields] == [False, False, False, True, True, True]

    def test_end_skips_non_calendar(self) -> None:
        """Enums after an end field are unaffected."""
        from uritemplates import Template

        fields = Template("$Y-$(Y;end)_$(enum;values=a,b)").fields
        assert [f.end for f in fields] == [False, True, False]


# =============================================================================
# Natural field
# =============================================================================


class TestNaturalField:
    """Tests for choosing the field that sets the step."""

    @pytest.mark.parametrize(
        "spec,source",
        [
            ("$Y", "$Y"),
            ("$Y$m$d", "$d"),
            ("$Y-$j", "$j"),
            ("$Y$m$d-$(Y;end)$m$d", "$d"),
            ("$(j;Y=2012)$(hrinterval;names=01,02,03,04)", "$(hrinterval;names=01,02,03,04)"),
            ("$(j;Y=2012).$H$M$S.$(subsec;places=3)", "$(subsec;places=3)"),
            ("$Y_$(enum;values=a,b)", "$Y"),
            ("$Y$m$(d;delta=5)", "$(d;delta=5)"),
        ],
    )
    def test_finest_field(self, spec: str, source: str) -> None:
        """The field with the shortest span wins."""
        from uritemplates import Template

        assert Template(spec).natural_field.source == source

    def test_no_spanning_field(self) -> None:
        """Enums, versions and wildcards carry no span."""
        from uritemplates import Template

        t = Template("$(enum;values=a,b)_$v_$x")
        assert t.natural_field is None
        assert t.step() is None

    def test_step(self) -> None:
        """step() is the natural field's span."""
        from uritemplates import Duration, Template

        assert Template("$Y").step() == Duration(years=1)
        assert Template("$Y$m$(d;delta=5)").step() == Duration(days=5)
        assert Template("$(periodic;start=2000-001;period=P27D)").step() == Duration(days=27)


# =============================================================================
# Identity and caching
# =============================================================================


class TestTemplateIdentity:
    """Tests for equality and compile_template."""

    def test_equal_by_canonical_form(self) -> None:
        """Legacy and canonical spellings of one template are equal."""
        from uritemplates import Template

        assert Template("%Y%m") == Template("$Y$m")
        assert hash(Template("%Y%m")) == hash(Template("$Y$m"))
        assert Template("$Y") != Template("$y")

    def test_repr(self) -> None:
        """repr shows the source template."""
        from uritemplates import Template

        assert repr(Template("$Y")) == "Template('$Y')"

    def test_compile_template_cached(self) -> None:
        """Compiling the same string twice returns the same object."""
        from uritemplates import compile_template

        assert compile_template("$Y_$j") is compile_template("$Y_$j")

    def test_compile_template_cache_bounded(self) -> None:
        """The compile cache holds a bounded number of templates."""
        from uritemplates import compile_template

        assert compile_template.cache_info().maxsize == 256


class TestFieldResolver:
    """Tests for the resolver base class."""

    def test_parse_and_format_required(self) -> None:
        """A resolver missing format cannot be created."""
        from uritemplates.template._resolvers import FieldResolver

        class ParseOnly(FieldResolver):
            def parse(self, field, text, state) -> None:
                pass

        with pytest.raises(TypeError):
            ParseOnly()

    def test_no_shift_by_default(self) -> None:
        """Fields without a shift qualifier shift nothing."""
        from uritemplates.template._compiler import scan, shift_offsets

        start, stop = shift_offsets(scan("$Y$m$(d;shift=2)-$(Y;end)$m$d"))
        assert start.days == 2
        assert stop.is_zero
