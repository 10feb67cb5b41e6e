import math


class Environment:
    '''
    Variables and display settings of one calculator session.

    Owned by whoever runs the session and handed to every evaluation. Nothing
    else keeps a reference to it.
    '''
    CONSTANTS = {
        'pi': math.pi,
        'e': math.e,
    }
    DEFAULT_PRECISION = 10
    MIN_PRECISION = 0
    MAX_PRECISION = 30

    def __init__(self, precision=None):
        self.vars = dict(type(self).CONSTANTS)
        self.precision = type(self).DEFAULT_PRECISION
        if precision is not None:
            self.set_precision(precision)

    def clear(self):
        '''
        Forget every variable, restoring the standard constants.
        '''
        self.vars.clear()
        self.vars.update(type(self).CONSTANTS)

    def set_precision(self, precision):
        '''
        Set how many decimals values are displayed with.

        Returns False, leaving precision alone, when out of range.
        '''
        if not type(self).MIN_PRECISION <= precision <= type(self).MAX_PRECISION:
            return False
        self.precision = precision
        return True

    def format(self, value):
        '''
        Render value in fixed point, with precision decimals.
        '''
        return '{:.{}f}'.format(value, self.precision)
