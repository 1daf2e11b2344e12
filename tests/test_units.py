#
# SIFormat - Units Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
import warnings
from dataclasses import FrozenInstanceError
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from siformat.constants import PhysicalConstants
from siformat.exceptions import OutOfRangeError, OutOfRangeWarning, SIFormatError, UndefinedExponentError
from siformat.numeric import NumericKind
from siformat.options import SIOptions, configure
from siformat.prefixes import MICRO_SIGN, SI_PREFIXES, PaddingPolicy
from siformat.units import SIQuantity, format_si


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFormatSI:

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(123.456e17, "G6", "metres", "12.3456 exa-metres", id="exa_long"),
            pytest.param(123.456e17, "G6", "m", "12.3456 Em", id="exa_short"),
            pytest.param(98.7654e-21, "G6", "g", "98.7654 zg", id="zepto"),
            pytest.param(45.7, "G7", "m", "45.7 m", id="no_prefix"),
            pytest.param(0.5, "G4", "l", "500 ml", id="milli"),
            pytest.param(1500, "N2", "m", "1.50 km", id="kilo_int"),
            pytest.param(
                PhysicalConstants.LIGHT_YEAR, "G3", "metres", "9.46 peta-metres", id="light_year"
            ),
            pytest.param(1.0, "G6", "m", "1 m", id="one"),
            pytest.param(999, "G6", "m", "999 m", id="below_kilo"),
            pytest.param(1000, "G6", "m", "1 km", id="kilo_boundary"),
            pytest.param(0.001, "G6", "m", "1 mm", id="milli_boundary"),
            pytest.param(1e-21, "G6", "g", "1 zg", id="zepto_boundary"),
            pytest.param(1.5e-6, "G3", "F", "1.5 μF", id="micro_short"),
            pytest.param(1.5e-6, "G3", "farad", "1.5 micro-farad", id="micro_long"),
            pytest.param(9.99e26, "G3", "m", "999 Ym", id="top_of_range"),
            pytest.param(1234.5, "E2", "W", "1.23E+000 kW", id="exponent_spec"),
        ],
    )
    def test_double(self, value, precision, unit, expected):
        assert format_si(value, precision, unit) == expected

    def test_single(self):
        assert format_si(np.float32(123.789e-7), "G4", "F") == "12.38 μF"

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(
                Decimal("1234.5678901234567890123"), "G21", "grams", "1.23456789012345678901 kilo-grams", id="G21"
            ),
            pytest.param(Decimal("0.001"), "G6", "g", "1 mg", id="milli"),
            pytest.param(Decimal("1E+24"), "G3", "g", "1 Yg", id="yotta"),
            pytest.param(Decimal("-2.5E-9"), "F1", "s", "-2.5 ns", id="negative"),
        ],
    )
    def test_decimal(self, value, precision, unit, expected):
        assert format_si(value, precision, unit) == expected

    @pytest.mark.parametrize("entry", list(SI_PREFIXES), ids=lambda e: e.long_name or "none")
    def test_prefix_symmetry(self, entry):
        """10**exponent renders as 1 with exactly its own prefix, for every kind."""
        long_unit = f"{entry.long_name}-u-unit" if not entry.is_empty else "u-unit"
        assert format_si(float(f"1e{entry.exponent}"), "G1", "u-unit") == f"1 {long_unit}"
        assert format_si(Decimal(1).scaleb(entry.exponent), "G1", "u-unit") == f"1 {long_unit}"
        assert format_si(float(f"1e{entry.exponent}"), "G1", "g") == f"1 {entry.short_symbol}g"

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(1.0, id="one"),
            pytest.param(1.5, id="one_and_half"),
            pytest.param(45.7, id="mid"),
            pytest.param(999.5, id="top"),
        ],
    )
    def test_unit_range_has_no_prefix(self, value):
        quantity = SIQuantity(value, unit="m")
        assert quantity.prefix.is_empty
        assert quantity.scaled == value

    def test_default_precision(self):
        assert format_si(1234.5, unit="m") == "1.2345 km"

    def test_configured_precision(self):
        configure(precision="N2")
        assert format_si(1500, unit="m") == "1.50 km"

    def test_empty_unit(self):
        assert format_si(1500, "N2") == "1.50 k"
        assert format_si(12, "N2") == "12.00"


class TestPadding:

    @pytest.mark.parametrize(
        "unit, padding, expected",
        [
            pytest.param("metres", "dash", "1.50 kilo-metres", id="long_dash"),
            pytest.param("metres", "dash_space", "1.50 kilo-metres ", id="long_dash_space"),
            pytest.param("metres", "space", "1.50 kilometres ", id="long_space"),
            pytest.param("metres", "none", "1.50 kilometres", id="long_none"),
            pytest.param("metres", PaddingPolicy.NO_DASH_NO_SPACE, "1.50 kilometres", id="long_member"),
            pytest.param("m", "dash", "1.50 km", id="short_dash"),
            pytest.param("m", "dash_space", "1.50 km ", id="short_dash_space"),
            pytest.param("m", "space", "1.50 km ", id="short_space"),
            pytest.param("m", "none", "1.50 km", id="short_none"),
        ],
    )
    def test_policies(self, unit, padding, expected):
        assert format_si(1500, "N2", unit, padding) == expected

    def test_no_prefix_never_dashes(self):
        assert format_si(15, "N2", "metres", "dash") == "15.00 metres"
        assert format_si(15, "N2", "metres", "dash_space") == "15.00 metres "

    def test_configured_padding(self):
        configure(padding="space")
        assert format_si(1500, "N2", "metres") == "1.50 kilometres "

    def test_invalid(self):
        with pytest.raises(ValueError, match="invalid padding"):
            format_si(1500, "N2", "m", "hyphen")

    def test_long_form_min_length(self):
        opts = SIOptions(long_form_min_length=1)
        assert format_si(1500, "N2", "m", options=opts) == "1.50 kilo-m"


class TestSigns:

    @pytest.mark.parametrize(
        "value, precision, expected",
        [
            pytest.param(0, "G6", "0 m", id="int_zero"),
            pytest.param(0.0, "N2", "0.00 m", id="float_zero"),
            pytest.param(-0.0, "G6", "0 m", id="negative_zero"),
            pytest.param(Decimal("0"), "G6", "0 m", id="decimal_zero"),
        ],
    )
    def test_zero(self, value, precision, expected):
        assert format_si(value, precision, "m") == expected

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(-1500, "N2", "m", "-1.50 km", id="kilo"),
            pytest.param(-0.5, "G4", "l", "-500 ml", id="milli"),
            pytest.param(-123.456e17, "G6", "metres", "-12.3456 exa-metres", id="exa"),
            pytest.param(np.float32(-1.5e-6), "G3", "F", "-1.5 μF", id="single"),
        ],
    )
    def test_negative(self, value, precision, unit, expected):
        assert format_si(value, precision, unit) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(math.nan, id="nan"),
            pytest.param(math.inf, id="inf"),
            pytest.param(-math.inf, id="neg_inf"),
            pytest.param(np.float32(np.nan), id="single_nan"),
            pytest.param(Decimal("NaN"), id="decimal_nan"),
            pytest.param(Decimal("-Infinity"), id="decimal_neg_inf"),
        ],
    )
    def test_non_finite(self, value):
        with pytest.raises(UndefinedExponentError, match="not finite"):
            format_si(value, "G6", "m")

    @pytest.mark.parametrize("value", [0, -1.5, Decimal("-2")])
    def test_non_positive_raise(self, value):
        with pytest.raises(UndefinedExponentError):
            format_si(value, "G6", "m", options=SIOptions(non_positive="raise"))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            format_si(math.nan, "G6", "m")
        assert issubclass(UndefinedExponentError, SIFormatError)


class TestOutOfRange:

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(1e28, "G3", "metres", "1.00E+28 metres", id="above"),
            pytest.param(1e27, "G3", "m", "1.00E+27 m", id="upper_bound"),
            pytest.param(1e-25, "G3", "m", "1.00E-25 m", id="below"),
            pytest.param(99.9995e32, "G7", "litres", "9.999950E+33 litres", id="G7_above"),
            pytest.param(99.9994e-29, "G7", "litres", "9.999940E-28 litres", id="G7_below"),
            pytest.param(-1e30, "G2", "g", "-1.0E+30 g", id="negative"),
            pytest.param(10 ** 400, "G3", "metres", "1.00E+400 metres", id="int_beyond_float"),
            pytest.param(-(10 ** 400), "G2", "g", "-1.0E+400 g", id="negative_int_beyond_float"),
        ],
    )
    def test_passthrough(self, value, precision, unit, expected):
        assert format_si(value, precision, unit) == expected
        assert not SIQuantity(value, unit=unit, precision=precision).in_range

    def test_lower_bound_is_inclusive(self):
        quantity = SIQuantity(1e-24, unit="g", precision="G3")
        assert quantity.in_range
        assert str(quantity) == "1 yg"

    def test_warn(self):
        opts = SIOptions(out_of_range="warn")
        with pytest.warns(OutOfRangeWarning, match="outside the SI prefix range"):
            text = format_si(1e30, "G3", "m", options=opts)
        assert text == "1.00E+30 m"

    @pytest.mark.parametrize(
        "render",
        [
            pytest.param(lambda opts: format_si(1e30, "G3", "m", options=opts), id="format_si"),
            pytest.param(lambda opts: SIQuantity(1e30, unit="m", options=opts), id="quantity"),
        ],
    )
    def test_warning_location(self, render):
        """The warning points at the calling line, whichever entry point is used."""
        with pytest.warns(OutOfRangeWarning) as record:
            render(SIOptions(out_of_range="warn"))
        assert record[0].filename == __file__

    def test_in_range_does_not_warn(self):
        opts = SIOptions(out_of_range="warn")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert format_si(1.5e26, "G3", "m", options=opts) == "150 Ym"

    @pytest.mark.parametrize("value", [1e27, 1e-25, 1e40, Decimal("1E+100"), 10 ** 400])
    def test_raise(self, value):
        with pytest.raises(OutOfRangeError, match="outside SI prefix range"):
            format_si(value, "G3", "m", options=SIOptions.strict())


class TestRebucket:

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(999.9999, "G4", "l", "1 kl", id="G4"),
            pytest.param(999.9999, "F2", "m", "1.00 km", id="F2"),
            pytest.param(-999.9999, "G4", "l", "-1 kl", id="negative"),
            pytest.param(0.9999999, "G3", "s", "1 s", id="milli_to_none"),
            pytest.param(999.9999, "G7", "l", "999.9999 l", id="no_carry"),
        ],
    )
    def test_rebucket(self, value, precision, unit, expected):
        assert format_si(value, precision, unit) == expected

    @pytest.mark.parametrize(
        "value, precision, unit, expected",
        [
            pytest.param(999.9999, "G4", "l", "1000 l", id="G4"),
            pytest.param(999.9999, "F2", "m", "1000.00 m", id="F2"),
        ],
    )
    def test_compat(self, value, precision, unit, expected):
        assert format_si(value, precision, unit, options=SIOptions.compat()) == expected


class TestMicroSymbol:

    def test_default_greek_mu(self):
        assert format_si(1.5e-6, "G3", "F") == "1.5 μF"

    def test_micro_sign(self):
        opts = SIOptions(micro_symbol=MICRO_SIGN)
        assert format_si(1.5e-6, "G3", "F", options=opts) == "1.5 µF"

    def test_long_form_unaffected(self):
        opts = SIOptions(micro_symbol=MICRO_SIGN)
        assert format_si(1.5e-6, "G3", "farad", options=opts) == "1.5 micro-farad"


class TestTypes:

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("12", id="str"),
            pytest.param(True, id="bool"),
            pytest.param(None, id="none"),
        ],
    )
    def test_unsupported_value(self, value):
        with pytest.raises(TypeError):
            format_si(value, "G6", "m")

    def test_unit_type(self):
        with pytest.raises(TypeError, match="unit must be str"):
            format_si(1.5, "G6", 5)

    def test_invalid_precision(self):
        with pytest.raises(ValueError, match="invalid precision spec"):
            format_si(1.5, "X", "m")


class TestSIQuantity:

    def test_decomposition(self):
        quantity = SIQuantity(1500, unit="m", precision="N2")
        assert quantity.value == 1500.0 and isinstance(quantity.value, float)
        assert quantity.kind is NumericKind.DOUBLE
        assert quantity.prefix.long_name == "kilo"
        assert quantity.exponent == 3
        assert quantity.scaled == 1.5
        assert quantity.precision == "N2"
        assert quantity.padding is PaddingPolicy.DASH_ONLY
        assert quantity.in_range
        assert not quantity.is_long_form
        assert quantity.number_str == "1.50"
        assert quantity.prefix_str == "k"
        assert quantity.units_str == "km"
        assert quantity.as_str == str(quantity) == "1.50 km"

    def test_long_form(self):
        quantity = SIQuantity(123.456e17, unit="metres", precision="G6")
        assert quantity.is_long_form
        assert quantity.prefix_str == "exa-"
        assert quantity.units_str == "exa-metres"

    def test_defaults_resolved(self):
        configure(precision="G3", padding="space")
        quantity = SIQuantity(0.5, unit="l")
        assert quantity.precision == "G3"
        assert quantity.padding is PaddingPolicy.TRAILING_SPACE_ONLY
        assert str(quantity) == "500 ml "

    def test_decimal_scaled_exactly(self):
        quantity = SIQuantity(Decimal("1234.5678901234567890123"), unit="grams", precision="G21")
        assert quantity.kind is NumericKind.DECIMAL
        assert quantity.scaled == Decimal("1.2345678901234567890123")

    def test_single(self):
        quantity = SIQuantity(np.float32(123.789e-7), unit="F", precision="G4")
        assert quantity.kind is NumericKind.SINGLE
        assert isinstance(quantity.scaled, np.float32)
        assert quantity.exponent == -6

    def test_frozen(self):
        quantity = SIQuantity(1500, unit="m")
        with pytest.raises(FrozenInstanceError):
            quantity.value = 2000

    def test_equality(self):
        assert SIQuantity(1500, unit="m") == SIQuantity(1500.0, unit="m")
        assert SIQuantity(1500, unit="m") != SIQuantity(1500, unit="g")

    def test_parse(self):
        quantity = SIQuantity.parse("1.23456 pico-farad")
        assert quantity.unit == "farad"
        assert quantity.prefix.long_name == "pico"
        assert quantity.value == pytest.approx(1.23456e-12, abs=1e-18)
        assert str(quantity) == "1.23456 pico-farad"

    def test_parse_with_unit(self):
        quantity = SIQuantity.parse("1.5 kPa", unit="Pa", precision="N1")
        assert quantity.unit == "Pa"
        assert quantity.value == 1500.0
        assert str(quantity) == "1.5 kPa"

    def test_parse_decimal(self):
        quantity = SIQuantity.parse("1.234567890123456789012 km", kind="decimal", precision="R")
        assert quantity.value == Decimal("1234.567890123456789012")
        assert str(quantity) == "1.234567890123456789012 km"
