import math
import operator
import random
from decimal import Decimal
from fractions import Fraction
from itertools import product

import pytest

from bigdecimal import *
from bigdecimal.limbs import Magnitude


def P(text, precision=None):
    return parse(text, 10, precision)


def round_fraction(value, precision):
    '''Round a positive Fraction half-even to precision significant bits.'''
    exponent = value.numerator.bit_length() - value.denominator.bit_length()
    if value < Fraction(2) ** exponent:
        exponent -= 1
    unit = Fraction(2) ** (exponent - precision + 1)
    return round(value / unit) * unit


NAN = parse('nan')
all_precisions = (1, 2, 24, 53, 64, 113, 200)
finite_texts = ('0', '-0', '1', '-1', '0.1', '-2.5', '3.3', '6.02214076e23', '1e-30',
                '-123456789.125', '1e100', '7')


# Run every test with a fresh copy of the default context
@pytest.fixture(autouse=True)
def context():
    with local_context(DefaultContext) as context:
        yield context


class TestScenarios:

    def test_add(self):
        assert P('1.1') + P('1.9') == P('3')

    def test_remainder(self):
        assert P('3') % P('2') == P('1')

    def test_subtract(self):
        assert P('3') - P('2') == P('1')
        assert P('2') - P('3') == -P('1')

    def test_multiply(self):
        assert P('3.3') * P('2') == P('6.6')

    def test_divide(self):
        assert P('6.6') / P('2') == P('3.3')

    def test_is_zero(self):
        assert zero().is_zero()
        assert P('0').is_zero()
        assert not P('1.9').is_zero()


class TestConstruction:

    def test_zero(self, context):
        value = zero()
        assert value.precision == context.precision == 53
        assert value.special == Special.ZERO
        assert not value.sign

    def test_one(self, context):
        context.precision = 7
        value = one()
        assert value.precision == 7
        assert value == 1
        assert one(Context(precision=3)).precision == 3

    @pytest.mark.parametrize('precision', all_precisions)
    def test_with_precision(self, precision):
        value = with_precision(precision)
        assert value.precision == precision
        assert value.is_zero()
        assert not value.sign

    @pytest.mark.parametrize('precision', (0, -1, 1.5, '53', None))
    def test_bad_precision(self, precision):
        with pytest.raises(InvalidPrecision):
            with_precision(precision)
        if precision is not None:
            with pytest.raises(ConstructionError):
                from_int(1, precision)

    @pytest.mark.parametrize('value, precision', product(
        (0, 1, -1, 5, 255, -256, 10**20, -(2**100 + 1)), all_precisions))
    def test_from_int(self, value, precision):
        result = from_int(value, precision)
        assert result.precision == precision
        if value.bit_length() <= precision:
            assert result == value
        if value:
            assert result.significand.bit_length() == precision
            assert result.sign is (value < 0)

    def test_from_int_rounds(self, context):
        assert from_int(2**53 + 1) == 2**53
        assert context.flags == Flags.INEXACT
        assert from_int(2**53 + 3) == 2**53 + 4
        assert from_int(255, 4) == 256
        assert from_int(247, 4) == 240

    def test_from_int_type(self):
        with pytest.raises(TypeError):
            from_int(1.5)

    @pytest.mark.parametrize('value', (0.0, 1.0, -1.5, 0.1, 1 / 3, 123.456e-12, 1e300,
                                       5e-324, 1.7976931348623157e308))
    def test_from_float(self, value):
        result = from_float(value)
        assert result.precision == 53
        assert result == value
        assert float(result) == value

    def test_from_float_precision(self, context):
        assert from_float(0.1, 200) == 0.1
        assert not context.flags
        result = from_float(0.1, 24)
        assert result == Fraction(13421773, 2**27)
        assert context.flags == Flags.INEXACT

    def test_from_float_specials(self):
        value = from_float(-0.0)
        assert value.is_zero() and value.sign
        assert from_float(float('nan')).is_nan()
        with pytest.raises(ConstructionError):
            from_float(float('inf'))
        with pytest.raises(ConstructionError):
            from_float(float('-inf'))
        with pytest.raises(TypeError):
            from_float(1)

    @pytest.mark.parametrize('args, exc', (
        ((53, Special.FINITE, False, 0, Magnitude.ONE), ValueError),
        ((53, Special.NAN, True, 0, Magnitude.ZERO), ValueError),
        ((53, Special.ZERO, False, 1, Magnitude.ZERO), ValueError),
        ((53, Special.ZERO, False, 0, Magnitude.ONE), ValueError),
        ((53, 0, False, 0, Magnitude.ZERO), TypeError),
        ((53, Special.ZERO, 0, 0, Magnitude.ZERO), TypeError),
        ((53, Special.ZERO, False, 0.0, Magnitude.ZERO), TypeError),
        ((53, Special.ZERO, False, 0, 0), TypeError),
        ((0, Special.ZERO, False, 0, Magnitude.ZERO), InvalidPrecision),
    ))
    def test_validation(self, args, exc):
        with pytest.raises(exc):
            BigDecimal(*args)

    def test_direct(self):
        value = BigDecimal(3, Special.FINITE, True, 1, Magnitude.from_int(0b101))
        assert value == -2.5
        assert value.exponent_int() == -1


class TestParse:

    @pytest.mark.parametrize('text, radix, answer', (
        ('0x1.8p3', 0, 12),
        ('-0X1P-2', 0, -0.25),
        ('0b101', 0, 5),
        ('101', 2, 5),
        ('0b1.1e2', 2, 6),
        ('ff', 16, 255),
        ('1e2', 16, 482),
        ('1@2', 16, 256),
        ('zz', 36, 1295),
        ('ZZ', 36, 1295),
        ('Az', 62, 681),
        ('nan', 36, 30191),
        ('12@+2', 10, 1200),
        ('  +42  ', 0, 42),
        ('1.5E-3', 10, 0.0015),
        ('.5', 10, 0.5),
        ('5.', 10, 5),
        ('0.1', 10, 0.1),
        ('1e22', 10, 1e22),
        ('123456789012345678901234567890', 10, 1.2345678901234568e29),
        ('2.2250738585072014e-308', 10, 2.2250738585072014e-308),
        ('0.1', 3, Fraction(1, 3)),
        ('0.1', 7, Fraction(1, 7)),
    ))
    def test_parse(self, text, radix, answer):
        if isinstance(answer, Fraction):
            # Not representable; compare with the correctly rounded double
            assert parse(text, radix) == float(answer)
        else:
            assert parse(text, radix) == answer

    @pytest.mark.parametrize('text', ('nan', 'NaN', '-nan', '@nan@', '+@NAN@'))
    def test_nan(self, text):
        value = P(text)
        assert value.is_nan()
        assert not value.sign

    def test_negative_zero(self):
        value = P('-0.000')
        assert value.is_zero()
        assert value.sign
        assert value == P('0')

    @pytest.mark.parametrize('precision', all_precisions)
    def test_precision(self, context, precision):
        assert P('1.5', precision).precision == precision
        context.precision = precision
        assert P('1.5').precision == precision

    def test_rounding(self, context):
        assert P('1.5', 1) == 2
        assert P('2.5', 2) == 2
        assert P('3.5', 2) == 4
        assert P('0.1', 24) == Fraction(13421773, 2**27)
        # The double nearest 0.001 lies above it
        assert P('1e-3', 200) < 0.001
        assert context.flags == Flags.INEXACT
        context.clear_flags()
        assert P('0.5') == 0.5
        assert P('-1234.5e-1') == -123.45
        assert context.flags == Flags.INEXACT
        context.clear_flags()
        assert P('-12.345e3') == -12345
        assert not context.flags

    def test_huge_exponents(self):
        tiny = P('1e-400', 10)
        assert not tiny.is_zero()
        assert tiny < P('1e-399', 10)
        huge = P('1e400', 10)
        assert huge > P('1e399', 10)
        assert huge == from_int(10**400, 10)

    def test_enormous_exponents(self, context):
        tiny = P('1e-100000000')
        assert tiny.exponent == -332192810
        assert tiny < P('1e-99999999')
        assert context.flags == Flags.INEXACT
        huge = P('-2.5e100000000')
        assert huge.sign
        assert huge.exponent == 332192810
        assert float(tiny * huge) == pytest.approx(-2.5)

    def test_enormous_binary_exponents(self, context):
        assert parse('0x1p-100000000', 0).exponent == -100000000
        assert parse('1@-100000000', 16).exponent == -400000000
        assert parse('0.1@100000000', 32).exponent == 499999995
        assert not context.flags

    @pytest.mark.parametrize('text, radix, answer, precision', (
        (text, radix, answer, precision)
        for (text, radix, answer), precision in product((
            ('1e-400', 10, Fraction(1, 10**400)),
            ('1e400', 10, Fraction(10**400)),
            ('123456789e-300', 10, Fraction(123456789, 10**300)),
            ('3.7e350', 10, Fraction(37 * 10**349)),
            ('9.99e-5000', 10, Fraction(999, 10**5002)),
            ('1@-500', 62, Fraction(1, 62**500)),
            ('2.1@700', 3, Fraction(7 * 3**699)),
            ('0.5@-321', 24, Fraction(5, 24**322)),
        ), (1, 24, 53, 200))
    ))
    def test_large_powers_round_correctly(self, context, text, radix, answer, precision):
        value = parse(text, radix, precision)
        assert value == round_fraction(answer, precision)
        assert value != answer
        assert context.flags == Flags.INEXACT

    @pytest.mark.parametrize('radix', (1, -1, 63, 64))
    def test_bad_radix(self, radix):
        with pytest.raises(InvalidRadix):
            parse('1', radix)

    @pytest.mark.parametrize('text, position', (
        ('', 0), ('abc', 0), ('1.2.3', 3), ('1e', 2), ('--1', 1), ('1 2', 1),
    ))
    def test_parse_error(self, text, position):
        with pytest.raises(ParseError) as e:
            P(text)
        assert e.value.position == position
        assert e.value.text == text
        assert isinstance(e.value, ValueError)
        assert isinstance(e.value, BigDecimalError)


class TestArithmetic:

    @pytest.mark.parametrize('op, lhs_precision, rhs_precision', product(
        ('add', 'subtract', 'multiply', 'divide', 'remainder'), all_precisions, (1, 53, 113)))
    def test_precision_propagation(self, op, lhs_precision, rhs_precision):
        lhs = from_int(7, lhs_precision)
        rhs = P('2.5', rhs_precision)
        precision = max(lhs_precision, rhs_precision)
        assert getattr(lhs, op)(rhs).precision == precision
        assert getattr(rhs, op)(lhs).precision == precision
        assert getattr(lhs, op)(NAN.to_precision(rhs_precision)).precision == precision
        assert getattr(with_precision(lhs_precision), op)(rhs).precision == precision

    @pytest.mark.parametrize('text, precision', product(finite_texts, (2, 53, 100)))
    def test_identities(self, text, precision):
        x = P(text, precision)
        assert x + zero() == x
        assert x * one() == x
        assert (x - x).is_zero()
        assert not (x - x).sign
        assert -(-x) == x
        assert (x + -x).is_zero()
        assert x.negate().negate() == x

    @pytest.mark.parametrize('lhs, rhs', product(finite_texts, repeat=2))
    def test_exact_results(self, lhs, rhs):
        x, y = P(lhs, 60), P(rhs, 60)
        # At 1000 bits these operations are exact
        a, b = x.to_precision(1000), y.to_precision(1000)
        assert a + b == Fraction(*x.as_integer_ratio()) + Fraction(*y.as_integer_ratio())
        assert a - b == Fraction(*x.as_integer_ratio()) - Fraction(*y.as_integer_ratio())
        assert a * b == Fraction(*x.as_integer_ratio()) * Fraction(*y.as_integer_ratio())

    @pytest.mark.parametrize('lhs, rhs', product((0.1, -2.5, 1 / 3, 1e20, 7.0, -3e-7,
                                                  123.456, 2.0 ** -30), repeat=2))
    def test_matches_double(self, lhs, rhs):
        x, y = from_float(lhs), from_float(rhs)
        assert x + y == lhs + rhs
        assert x - y == lhs - rhs
        assert x * y == lhs * rhs
        assert x / y == lhs / rhs
        assert x % y == math.fmod(lhs, rhs)

    def test_add_sign(self):
        assert (P('1.5') + P('-1.5')).sign is False
        assert (P('-0') + P('-0')).sign is False
        assert (P('-0') - P('0')).sign is False
        assert P('-0') + P('-2') == -2
        assert P('3') - P('0') == 3
        assert P('0') - P('3') == -3

    def test_add_tie(self, context):
        assert P('1.5', 2) + P('0.25', 2) == 2
        assert P('1.5', 2) + P('-0.25', 2) == 1
        assert context.flags == Flags.INEXACT

    def test_add_far_apart(self, context):
        big, tiny, twice = from_int(1), P('1e-1000'), P('2e-1000')
        context.clear_flags()
        assert big + tiny == 1
        assert tiny + big == 1
        assert big - tiny == 1
        assert tiny - big == -1
        assert context.flags == Flags.INEXACT
        context.clear_flags()
        assert tiny + tiny == twice
        assert not context.flags

    def test_add_far_apart_rounds_correctly(self):
        one_ = from_int(1)
        # Exactly half an ulp below 1 ties to 1; just beyond that rounds down
        assert one_ - parse('0x1p-54', 0) == 1
        assert one_ - parse('0x1.000000000001p-54', 0) == 1 - 2.0**-53
        assert one_ - parse('0x1.02p-53', 0) == 1 - 2.0**-53
        # Operands far below the rounding point
        assert one_ - parse('0x1.fffp-56', 0) == 1
        assert one_ + parse('0x1.fffp-56', 0) == 1
        assert parse('0x1.fffp-56', 0) - one_ == -1
        assert one_.to_precision(2) + parse('0x1p-60', 0, 200) == 1 + Fraction(1, 2**60)

    def test_multiply(self, context):
        assert from_int(3, 2) * from_int(3, 2) == 8
        assert context.flags == Flags.INEXACT
        value = P('-0') * P('5')
        assert value.is_zero() and value.sign
        value = P('-3') * P('-0')
        assert value.is_zero() and not value.sign

    def test_divide(self, context):
        assert from_int(1) / from_int(3) == 1 / 3
        assert from_int(2) / from_int(3) == 2 / 3
        assert context.flags == Flags.INEXACT
        context.clear_flags()
        assert from_int(1) / from_int(8) == 0.125
        assert not context.flags
        value = P('0') / P('-4')
        assert value.is_zero() and value.sign

    @pytest.mark.parametrize('precision', (1, 2, 7, 53, 100))
    def test_divide_precision(self, precision):
        value = from_int(1, precision) / from_int(3, 2)
        precision = max(precision, 2)
        assert value.precision == precision
        n, d = value.as_integer_ratio()
        # The quotient is within half an ulp of 1/3
        ulp = Fraction(1, 2 ** (precision + 1))
        assert abs(Fraction(n, d) - Fraction(1, 3)) <= ulp / 2

    def test_divide_by_zero(self, context):
        value = P('1') / P('0')
        assert value.is_nan()
        assert context.flags == Flags.DIV_BY_ZERO
        context.clear_flags()
        assert (P('-1') / P('-0')).is_nan()
        assert context.flags == Flags.DIV_BY_ZERO
        context.clear_flags()
        assert (P('0') / P('0')).is_nan()
        assert context.flags == Flags.INVALID

    @pytest.mark.parametrize('lhs, rhs, answer', (
        ('3', '2', 1),
        ('-7', '2', -1),
        ('7', '-2', 1),
        ('-7', '-2', -1),
        ('7.5', '2', 1.5),
        ('0.75', '0.5', 0.25),
        ('1', '3', 1),
        ('-1', '3', -1),
        ('6', '3', 0),
        ('6', '0.25', 0),
        ('1e-20', '1e20', 1e-20),
    ))
    def test_remainder(self, lhs, rhs, answer):
        assert P(lhs) % P(rhs) == answer

    def test_remainder_huge_quotient(self, context):
        assert from_int(2**200) % from_int(7) == 4
        assert from_int(2**10000, 3) % from_int(7, 3) == 2
        assert not context.flags

    def test_remainder_wide_lhs(self):
        value = P('10.5', 100) % from_int(4, 2)
        assert value == 2.5
        assert value.precision == 100

    def test_remainder_zero(self, context):
        value = P('-0') % P('5')
        assert value.is_zero() and value.sign
        value = P('-6') % P('3')
        assert value.is_zero()
        assert (P('5') % P('0')).is_nan()
        assert context.flags == Flags.INVALID

    @pytest.mark.parametrize('op', ('add', 'subtract', 'multiply', 'divide', 'remainder'))
    def test_nan_propagation(self, context, op):
        for lhs, rhs in ((NAN, P('1')), (P('1'), NAN), (NAN, NAN), (NAN, P('0')),
                         (P('0'), NAN)):
            result = getattr(lhs, op)(rhs)
            assert result.is_nan()
            assert not result.sign
        assert not context.flags

    def test_negate(self):
        assert P('2').negate() == -2
        assert P('-2').negate() == 2
        assert P('0').negate().sign
        value = NAN.negate()
        assert value.is_nan() and not value.sign
        assert (-NAN).is_nan()
        assert abs(P('-2.5')) == 2.5
        assert P('-2.5').copy_abs() == 2.5
        assert P('2.5').copy_negate() == -2.5
        assert +P('1') == 1

    def test_to_precision(self, context):
        value = from_float(0.1)
        narrow = value.to_precision(24)
        assert narrow.precision == 24
        assert narrow == Fraction(13421773, 2**27)
        assert context.flags == Flags.INEXACT
        context.clear_flags()
        wide = value.to_precision(200)
        assert wide.precision == 200
        assert wide == value
        assert not context.flags
        assert NAN.to_precision(7).is_nan()
        assert NAN.to_precision(7).precision == 7
        assert P('-0').to_precision(3).sign
        with pytest.raises(InvalidPrecision):
            value.to_precision(0)

    def test_immutable(self):
        value = P('1.5')
        with pytest.raises(AttributeError):
            value.sign = True
        result = value + value
        assert value == 1.5
        assert result == 3

    def test_mixed(self):
        assert P('1.5') + 1 == 2.5
        assert 1 + P('1.5') == 2.5
        assert 10 - P('2.5') == 7.5
        assert P('2.5') - 0.5 == 2
        assert P('2.5') * 2 == 5
        assert 2 * P('2.5') == 5
        assert P('1') / 4 == 0.25
        assert 1 / P('4') == 0.25
        assert P('7') % 2 == 1
        assert 7 % P('2') == 1
        assert P('1.5') + 0.25 == 1.75
        assert (from_int(1, 24) + 1).precision == 24
        assert (1.5 * from_int(1, 100)).precision == 100
        with pytest.raises(TypeError):
            P('1') + 'x'
        with pytest.raises(TypeError):
            P('1') * Fraction(1, 2)

    def test_random_against_fractions(self):
        random.seed(12)
        for _ in range(200):
            precision = random.randrange(1, 150)
            x = from_int((random.getrandbits(159) | 1) * random.choice((1, -1)), precision)
            y = from_int(random.getrandbits(90) + 1, precision)
            fx, fy = Fraction(*x.as_integer_ratio()), Fraction(*y.as_integer_ratio())
            # Integers below 2^160 add exactly at 1000 bits
            assert x + y == (x.to_precision(1000) + y).to_precision(precision)
            assert x * y == (x.to_precision(1000) * y).to_precision(precision)
            quotient = x / y
            ulp = Fraction(2) ** quotient.exponent_int()
            assert abs(Fraction(*quotient.as_integer_ratio()) - fx / fy) <= ulp / 2
            assert x % y == fx - fy * int(fx / fy)


class TestComparison:

    values = ('-1e10', '-10', '-1.5', '-0', '0', '0.25', '1', '3', '1e10')

    @pytest.mark.parametrize('lhs, rhs', product(values, repeat=2))
    def test_compare(self, lhs, rhs):
        x, y = P(lhs), P(rhs, 100)
        fx, fy = Fraction(lhs), Fraction(rhs)
        if fx < fy:
            answer = Compare.LESS_THAN
        elif fx == fy:
            answer = Compare.EQUAL
        else:
            answer = Compare.GREATER_THAN
        assert x.compare(y) == answer
        assert x.equals(y) is (fx == fy)
        assert x.less_than(y) is (fx < fy)
        assert (x == y) is (fx == fy)
        assert (x != y) is (fx != fy)
        assert (x < y) is (fx < fy)
        assert (x <= y) is (fx <= fy)
        assert (x > y) is (fx > fy)
        assert (x >= y) is (fx >= fy)

    @pytest.mark.parametrize('value', values + ('nan', ))
    def test_nan(self, value):
        x = P(value)
        assert x.compare(NAN) == Compare.UNORDERED
        assert NAN.compare(x) == Compare.UNORDERED
        assert not x.equals(NAN)
        assert not NAN.equals(x)
        assert not x.less_than(NAN)
        assert not NAN.less_than(x)
        assert not (x == NAN)
        assert x != NAN
        assert not (x < NAN) and not (x <= NAN) and not (x > NAN) and not (x >= NAN)

    def test_nan_not_equal_itself(self):
        assert not NAN.equals(NAN)
        assert NAN != NAN
        assert not NAN == float('nan')
        assert not NAN == 0

    def test_zeroes(self):
        assert P('0') == P('-0')
        assert P('-0').equals(with_precision(1))
        assert not P('-0').less_than(P('0'))
        assert P('-0') == 0
        assert P('-0') == -0.0

    def test_precisions(self):
        assert from_int(3, 2) == from_int(3, 200)
        assert P('0.1', 24) != P('0.1', 53)
        assert P('0.1', 24) > P('0.1', 53)
        assert P('0.1', 53) > P('0.1', 200)

    def test_mixed(self):
        assert P('0.1') == 0.1
        assert P('0.1', 100) != 0.1
        assert P('0.1', 100) != Fraction(1, 10)
        assert P('0.5', 1) == Fraction(1, 2)
        assert from_int(3) == 3
        assert 3 == from_int(3)
        assert from_int(1) < 1.5
        assert 1.5 > from_int(1)
        assert from_int(10**30, 200) > 10**30 - 1
        assert P('1e300') < float('inf')
        assert P('-1e300') > float('-inf')
        assert not NAN < float('inf')
        assert (P('1') == 'x') is False
        with pytest.raises(TypeError):
            P('1') < 'x'


class TestConversions:

    @pytest.mark.parametrize('text, answer', (
        ('0.1', '0.1'),
        ('3', '3'),
        ('100', '100'),
        ('-2.5', '-2.5'),
        ('123.456', '123.456'),
        ('1e20', '1e+20'),
        ('1e16', '1e+16'),
        ('1234567890123456', '1234567890123456'),
        ('1e-5', '1e-05'),
        ('0.0001', '0.0001'),
        ('0', '0'),
        ('-0', '0'),
        ('nan', 'NaN'),
    ))
    def test_to_string(self, text, answer):
        value = P(text)
        assert value.to_string() == answer
        assert str(value) == answer
        assert repr(value) == answer

    def test_to_string_scenario(self):
        assert str(P('1.1') + P('1.9')) == '3'

    @pytest.mark.parametrize('value', (0.1, 123.456, 1.5e-7, 1.5e300, -2.5, 1 / 3,
                                       6.02214076e23, 1e16, 1e-5, -9.87654321e-100))
    def test_to_string_matches_python(self, value):
        assert str(from_float(value)) == repr(value)

    @pytest.mark.parametrize('precision, text', product(
        (11, 24, 53, 64, 113), ('0.1', '3.14159', '-2.71828e-20', '6.02214e23', '12345')))
    def test_round_trip(self, precision, text):
        value = P(text, precision)
        assert P(str(value), precision) == value

    def test_round_trip_random(self):
        random.seed(3)
        for _ in range(300):
            value = random.random() * 10.0 ** random.randrange(-300, 300)
            assert P(str(from_float(value))) == value


    @pytest.mark.parametrize('text, suffix', (
        ('0x1p16000', 'e+4816'), ('0x1p-16000', 'e-4817'), ('-0x1.8p12345', 'e+3716'),
    ))
    def test_large_exponent_strings(self, text, suffix):
        value = parse(text, 0)
        assert str(value).endswith(suffix)
        assert P(str(value)) == value

    def test_large_exponent_digits(self, context):
        value = parse('0x1p16000', 0)
        assert value.to_decimal_string(20) == format(Decimal(2**16000), '.19e')
        assert context.flags == Flags.INEXACT

    def test_to_decimal_string(self, context):
        assert from_float(1.25).to_decimal_string(5) == '1.2500'
        assert not context.flags
        assert from_float(1.25).to_decimal_string(2) == '1.2'
        assert from_float(1.35).to_decimal_string(2) == '1.4'
        assert from_float(2 / 3).to_decimal_string(3) == '0.667'
        assert context.flags == Flags.INEXACT
        assert from_float(123.456e12).to_decimal_string(3, Dec_g_Format) == f'{123.456e12:.3g}'
        assert from_float(1.0).to_decimal_string(3, Dec_g_Format) == f'{1.0:.3g}'
        assert from_float(1.0).to_decimal_string(text_format=TextFormat(force_point=True)) \
            == '1.0e+0'
        assert NAN.to_decimal_string(3, Dec_g_Format) == 'nan'
        with pytest.raises(ValueError):
            from_float(1.0).to_decimal_string(-1)

    def test_int(self):
        assert int(P('-2.7')) == -2
        assert int(P('2.7')) == 2
        assert int(P('1e20')) == 10**20
        assert int(P('-0')) == 0
        assert math.trunc(P('-3.5')) == -3
        with pytest.raises(ValueError):
            int(NAN)

    def test_float(self):
        assert float(P('0.1')) == 0.1
        assert float(P('0.1', 200)) == 0.1
        assert float(P('-0.25')) == -0.25
        assert math.isnan(float(NAN))

    def test_hash(self):
        assert hash(from_int(3)) == hash(3)
        assert hash(P('0.5')) == hash(0.5)
        assert hash(P('0.1')) == hash(0.1)
        assert hash(P('-0')) == hash(0)
        assert hash(NAN) == 0
        assert len({from_int(3, 2), from_int(3, 100), 3}) == 1

    def test_bool(self):
        assert not zero()
        assert not P('-0')
        assert one()
        assert NAN

    @pytest.mark.parametrize('text, answer', (
        ('0.75', (3, 4)),
        ('-12', (-12, 1)),
        ('0', (0, 1)),
        ('-0', (0, 1)),
        ('1e3', (1000, 1)),
        ('0x1p-100', (1, 2**100)),
    ))
    def test_as_integer_ratio(self, text, answer):
        assert parse(text, 0).as_integer_ratio() == answer

    def test_as_integer_ratio_nan(self):
        with pytest.raises(ValueError):
            NAN.as_integer_ratio()

    def test_predicates(self):
        assert NAN.is_nan() and not NAN.is_finite()
        assert P('1').is_finite() and not P('1').is_nan()
        assert P('0').is_finite()
        assert P('-1').is_negative() and not P('1').is_negative()
        assert P('-0').is_negative()
        assert not NAN.is_negative()
        assert P('1').radix() == 2
        assert from_int(1, 53).decimal_precision() == 17

    def test_operator_functions(self):
        for op in (operator.add, operator.sub, operator.mul, operator.truediv, operator.mod):
            assert op(P('9'), P('4')) == op(9.0, 4.0)
