'''
Evaluation tests, mostly through the whole pipeline
'''

import math

import regex

from supercalc.machine import Result, assignment_target, calculate, evaluate
from supercalc.parser import parse
from supercalc.util import (ArityError, CalcError, DomainError, ParseError,
                            ShapeError, UndefinedNameError)

from pytest import approx, mark, raises


def value(line, environment):
    return calculate(line, environment).value


@mark.parametrize('line, expected', [
    ('2+3*4', 14.0),
    ('(2+3)*4', 20.0),
    ('2^3^2', 512.0),
    ('10-4-3', 3.0),
    ('12/3/2', 2.0),
    ('-2^2', -4.0),
    ('2^-1', 0.5),
    ('-2*3', -6.0),
    ('--2', 2.0),
    ('1.5e3/3', 500.0),
    ('2 * (3 + 4) ^ 2', 98.0),
])
def test_arithmetic(line, expected, environment):
    assert value(line, environment) == expected


def test_deterministic(environment):
    line = '3.7*(2-1/3)^1.5 - sqrt(2)'
    assert value(line, environment) == value(line, environment)


def test_constants(environment):
    assert value('pi', environment) == math.pi
    assert value('e', environment) == math.e
    assert value('ln(e)', environment) == approx(1.0)


@mark.parametrize('line, expected', [
    ('pow(2,8)', 256.0),
    ('pow(2, 0.5)', math.sqrt(2)),
    ('sin(pi/2)', 1.0),
    ('cos(0)', 1.0),
    ('tan(pi/4)', 1.0),
    ('asin(1)', math.pi / 2),
    ('acos(1)', 0.0),
    ('atan(1)', math.pi / 4),
    ('sqrt(16)', 4.0),
    ('cbrt(27)', 3.0),
    ('cbrt(-8)', -2.0),
    ('exp(0)', 1.0),
    ('abs(-3)', 3.0),
    ('floor(-1.5)', -2.0),
    ('ceil(1.2)', 2.0),
    ('round(2.5)', 3.0),
    ('round(-2.5)', -3.0),
    ('ln(1)', 0.0),
    ('log(e^2)', 2.0),
    ('log10(1000)', 3.0),
    ('2*sqrt(9)+1', 7.0),
])
def test_functions(line, expected, environment):
    assert value(line, environment) == approx(expected)


def test_separator_is_ignored(environment):
    assert value('(2, 10) pow', environment) == 1024.0


@mark.parametrize('line', ['sqrt(-1)', '(-8)^(1/3)', 'asin(2)', 'ln(-1)'])
def test_domain_problems_give_nan(line, environment):
    assert math.isnan(value(line, environment))


@mark.parametrize('line, expected', [
    ('ln(0)', -math.inf),
    ('exp(1000)', math.inf),
    ('0^-1', math.inf),
    ('2^2000', math.inf),
    ('(-2)^1025', -math.inf),
    ('1e308*10', math.inf),
])
def test_overflow_gives_infinity(line, expected, environment):
    assert value(line, environment) == expected


@mark.parametrize('line', ['5/0', '0/0', '1/(2-2)'])
def test_division_by_zero(line, environment):
    before = dict(environment.vars)
    with raises(DomainError, match=regex.escape('Division by zero')):
        calculate(line, environment)
    assert environment.vars == before


def test_assignment(environment):
    assert calculate('x=5', environment) == Result(5.0, 'x')
    assert environment.vars['x'] == 5.0
    assert calculate('3*x^2+1', environment) == Result(76.0, None)
    assert environment.vars['x'] == 5.0


def test_assignment_overwrites(environment):
    calculate('x = 1', environment)
    calculate('x = x + 1', environment)
    assert environment.vars['x'] == 2.0


def test_assignment_of_negative(environment):
    assert value('y = -pow(2, 3)', environment) == -8.0


def test_constants_can_be_reassigned(environment):
    calculate('pi = 3', environment)
    assert value('pi', environment) == 3.0


def test_failed_assignment_leaves_environment(environment):
    before = dict(environment.vars)
    with raises(DomainError):
        calculate('z = 1/0', environment)
    with raises(UndefinedNameError):
        calculate('z = w', environment)
    assert environment.vars == before


@mark.parametrize('line', ['2=3', 'x+1=3', 'x=y=3', 'x=', '(1)=2',
                         '(x=3)', '(x=3)+1'])
def test_invalid_assignment(line, environment):
    before = dict(environment.vars)
    with raises(ParseError, match=regex.escape('Invalid assignment')):
        calculate(line, environment)
    assert environment.vars == before


def test_assignment_target():
    assert assignment_target(parse('x = 1 + 2')) == 'x'
    assert assignment_target(parse('x + 2')) is None


def test_undefined_variable(environment):
    with raises(UndefinedNameError, match=regex.escape('Undefined variable: y')):
        calculate('y+1', environment)
    assert 'y' not in environment.vars


def test_functions_shadow_variables(environment):
    calculate('sin = 3', environment)
    assert environment.vars['sin'] == 3.0
    assert value('sin(0)', environment) == 0.0


@mark.parametrize('line, message', [
    ('pow(2)', 'Missing arguments for function pow'),
    ('sqrt()', 'Missing argument for function sqrt'),
    ('2*', 'Insufficient stack (operator *)'),
    ('+2', 'Insufficient stack (operator +)'),
    ('-', 'Insufficient stack (operator u-)'),
])
def test_missing_operands(line, message, environment):
    with raises(ArityError, match=regex.escape(message)):
        calculate(line, environment)


def test_nested_call_limitation(environment):
    # Arguments are not rewritten, so the inner pow runs on an empty stack.
    with raises(ArityError, match=regex.escape('Missing arguments')):
        calculate('pow(pow(2,3),2)', environment)


def test_space_joined_arguments_limitation(environment):
    # Arguments become "2 -1", read as 2 minus 1.
    with raises(ArityError,
                match=regex.escape('Missing arguments for function pow')):
        calculate('pow(2,-1)', environment)
    # "2-1 3" is 2, then 1-3.
    assert value('pow(2-1,3)', environment) == 0.25
    assert value('pow(2,(-1))', environment) == 0.5


@mark.parametrize('line', ['2 3', '2e', '(1)(2)'])
def test_leftover_values(line, environment):
    with raises(ShapeError, match=regex.escape('Invalid expression')):
        calculate(line, environment)


def test_empty_rpn(environment):
    with raises(ShapeError):
        evaluate([], environment)


def test_all_errors_are_calc_errors(environment):
    for line in ['5/0', 'y', '2 3', '*', '(1', '$']:
        with raises(CalcError):
            calculate(line, environment)
