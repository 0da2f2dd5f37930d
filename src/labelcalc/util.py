from functools import wraps


class CalcError(Exception):
    pass


class DivisionByZero(CalcError):
    pass


class MalformedExpression(CalcError):
    pass


class NumericOverflow(CalcError):
    pass


class EditableStateViolation(CalcError):
    pass


def wrap_user_errors(fmt, error=CalcError):
    '''
    Decorator that converts stray exceptions into calculator errors.

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
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
