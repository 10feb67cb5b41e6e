from functools import wraps


class CalcError(Exception):
    '''
    Anything wrong with a line of user input.

    Aborts the line only; the message is args[0].
    '''


class LexicalError(CalcError):
    pass


class ParseError(CalcError):
    pass


class ArityError(CalcError):
    pass


class UndefinedNameError(CalcError):
    pass


class DomainError(CalcError):
    pass


class ShapeError(CalcError):
    '''
    Operand stack not left with exactly one value.
    '''


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts stray exceptions to CalcErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
