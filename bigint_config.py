import importlib
import os

# BIGINT_WANT_ASSERT=0 turns off the format checks, as does python -O
WANT_ASSERT = __debug__ and os.environ.get('BIGINT_WANT_ASSERT', '1') != '0'

DIGIT_BITS = 32
DIGIT_BASE = 1 << DIGIT_BITS
DIGIT_MASK = DIGIT_BASE - 1

SYMBOLS = '0123456789abcdefghijklmnopqrstuvwxyz'
MIN_BASE = 2
MAX_BASE = len(SYMBOLS)

XP_NAME = os.environ.get('BIGINT_XP', 'numpy')

_default_xp = None

def default_namespace():
    '''The array namespace new values store their digits in when none is given.'''
    global _default_xp
    if _default_xp is None:
        _default_xp = importlib.import_module(XP_NAME)
    return _default_xp

def digit_dtype(xp):
    return xp.uint32
