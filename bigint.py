# representation:
#  unsigned, DIGIT_BITS-wide digits kept in a DigitBuffer, least significant first
#  zero is a single 0 digit; the top digit is never 0 otherwise
#  digits are unstacked into python ints for arithmetic, python ints being the
#    double-width container, and stored back in one slice assignment.
#  reading every operand before anything is stored is what makes
#    r.add(r, r), q.div(r, q, y) and friends safe.
#  methods take the destination as the receiver, in mpz order:
#    r.add(x, y) is r = x + y

import enum
import operator

from bigint_config import (
    WANT_ASSERT, DIGIT_BITS, DIGIT_BASE, DIGIT_MASK,
    SYMBOLS, MIN_BASE, MAX_BASE, default_namespace,
)
from digitbuffer import DigitBuffer

class Ordering(enum.IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

def _ordering(a, b):
    return Ordering((a > b) - (a < b))

def _is_digit(d):
    return 0 <= d < DIGIT_BASE

def _normalize(digits):
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    return digits

def _symbol_value(c):
    if '0' <= c <= '9':
        return ord(c) - ord('0')
    if 'a' <= c <= 'z':
        return ord(c) - ord('a') + 10
    if 'A' <= c <= 'Z':
        return ord(c) - ord('A') + 10
    return None

# digit list kernels. inputs are normalized lists of python ints and are not modified.

def _cmp_n(xd, yd):
    if len(xd) != len(yd):
        return _ordering(len(xd), len(yd))
    for a, b in zip(reversed(xd), reversed(yd)):
        if a != b:
            return _ordering(a, b)
    return Ordering.EQUAL

def _add_n(xd, yd):
    if len(xd) < len(yd):
        xd, yd = yd, xd
    out = []
    carry = 0
    for i, a in enumerate(xd):
        s = a + (yd[i] if i < len(yd) else 0) + carry
        out.append(s & DIGIT_MASK)
        carry = s >> DIGIT_BITS
    if carry:
        out.append(carry)
    return out

def _sub_n(xd, yd):
    out = []
    borrow = 0
    for i, a in enumerate(xd):
        t = a - (yd[i] if i < len(yd) else 0) - borrow
        borrow = 1 if t < 0 else 0
        out.append(t & DIGIT_MASK)
    if WANT_ASSERT:
        assert borrow == 0, 'subtraction would be negative'
    return _normalize(out)

def _mul_1(xd, d):
    out = []
    carry = 0
    for a in xd:
        p = a * d + carry
        out.append(p & DIGIT_MASK)
        carry = p >> DIGIT_BITS
    if carry:
        out.append(carry)
    return out

def _carry_products(lo, hi):
    # digit i of the product is lo[i] + hi[i-1] plus the running carry
    out = []
    carry = 0
    prev = 0
    for a, b in zip(lo, hi):
        s = a + prev + carry
        out.append(s & DIGIT_MASK)
        carry = s >> DIGIT_BITS
        prev = b
    top = prev + carry
    if top:
        out.append(top)
    return out

def _mul_n(xd, yd):
    # the product fits in len(xd) + len(yd) digits, possibly one fewer
    acc = [0] * (len(xd) + len(yd))
    for j, yj in enumerate(yd):
        if yj == 0:
            continue
        row = _mul_1(xd, yj)
        carry = 0
        for i, p in enumerate(row):
            s = acc[i + j] + p + carry
            acc[i + j] = s & DIGIT_MASK
            carry = s >> DIGIT_BITS
        k = j + len(row)
        while carry:
            s = acc[k] + carry
            acc[k] = s & DIGIT_MASK
            carry = s >> DIGIT_BITS
            k += 1
    return _normalize(acc)

def _divrem_1(xd, d):
    q = [0] * len(xd)
    rem = 0
    for i in range(len(xd) - 1, -1, -1):
        q[i], rem = divmod((rem << DIGIT_BITS) | xd[i], d)
    return _normalize(q), rem

def _lshift(xd, s):
    out = []
    carry = 0
    for d in xd:
        t = (d << s) | carry
        out.append(t & DIGIT_MASK)
        carry = t >> DIGIT_BITS
    out.append(carry)
    return out

def _rshift(xd, s):
    out = []
    for i, d in enumerate(xd):
        hi = xd[i + 1] if i + 1 < len(xd) else 0
        out.append(((d >> s) | (hi << (DIGIT_BITS - s))) & DIGIT_MASK)
    return out

def _divrem_n(ud, vd):
    '''Long division of ud by vd where len(vd) >= 2 and ud >= vd.

    The divisor is shifted so its top digit has the high bit set, which keeps
    each quotient digit estimate at most two too large.
    '''
    n = len(vd)
    m = len(ud) - n
    s = DIGIT_BITS - vd[-1].bit_length()
    vn = _lshift(vd, s)[:n]
    un = _lshift(ud, s)
    vtop, vnext = vn[n - 1], vn[n - 2]
    q = [0] * (m + 1)
    for j in range(m, -1, -1):
        qhat, rhat = divmod((un[j + n] << DIGIT_BITS) | un[j + n - 1], vtop)
        while qhat >= DIGIT_BASE or qhat * vnext > ((rhat << DIGIT_BITS) | un[j + n - 2]):
            qhat -= 1
            rhat += vtop
            if rhat >= DIGIT_BASE:
                break

        borrow = 0
        carry = 0
        for i in range(n):
            p = qhat * vn[i] + carry
            carry = p >> DIGIT_BITS
            t = un[i + j] - (p & DIGIT_MASK) - borrow
            un[i + j] = t & DIGIT_MASK
            borrow = 1 if t < 0 else 0
        t = un[j + n] - carry - borrow
        un[j + n] = t & DIGIT_MASK

        if t < 0:
            # still one too large: add a divisor back
            qhat -= 1
            carry = 0
            for i in range(n):
                t = un[i + j] + vn[i] + carry
                un[i + j] = t & DIGIT_MASK
                carry = t >> DIGIT_BITS
            un[j + n] = (un[j + n] + carry) & DIGIT_MASK
        q[j] = qhat
    return _normalize(q), _normalize(_rshift(un[:n], s))


class BigInt:
    def __init__(self, data=None, base=None, *, xp=None):
        if xp is None:
            xp = data.xp if type(data) is BigInt else default_namespace()
        self.xp = xp
        self._digits = DigitBuffer(xp)
        if data is None:
            if base is not None:
                raise TypeError('base given without a string')
        elif type(data) is BigInt:
            if base is not None:
                raise TypeError('base given without a string')
            self.set(data)
        elif isinstance(data, str):
            self.set_str(data, 10 if base is None else base)
        else:
            try:
                value = operator.index(data)
            except TypeError:
                raise TypeError(f'cannot make a BigInt from {type(data).__name__}') from None
            if base is not None:
                raise TypeError('base given without a string')
            self.set_int(value)

    @property
    def count(self):
        return self._digits.length
    @property
    def reserved(self):
        return self._digits.capacity

    def digits(self):
        return tuple(self._digits.load())

    def ok(self):
        return self._digits.ok()

    def _check(*values):
        for value in values:
            assert value.ok(), value.__dict__

    def _store(r, digits):
        if WANT_ASSERT:
            assert len(digits) == 1 or digits[-1] != 0
        r._digits.store(digits)
        return r

    def clear(x):
        '''Free the digits. x must be rebuilt with BigInt() before reuse.'''
        if WANT_ASSERT:
            x._check()
        x._digits.release()

    # assignment

    def set(x, y):
        if WANT_ASSERT:
            x._check(y)
        if x is not y:
            x._store(y._digits.load())
        return x

    def set_ui(x, d):
        if WANT_ASSERT:
            x._check()
            assert _is_digit(d), d
        return x._store([d])

    def set_int(x, value):
        if WANT_ASSERT:
            x._check()
        if value < 0:
            raise ValueError(f'BigInt is unsigned, got {value}')
        digits = []
        while True:
            digits.append(value & DIGIT_MASK)
            value >>= DIGIT_BITS
            if not value:
                break
        return x._store(digits)

    def set_str(x, string, base=10):
        if WANT_ASSERT:
            x._check()
            assert MIN_BASE <= base <= MAX_BASE, base
        if not string:
            raise ValueError('empty string is not a number')
        # parse into a scratch value so x is untouched on error
        accum = BigInt(xp=x.xp)
        for pos, c in enumerate(string):
            value = _symbol_value(c)
            if value is None or value >= base:
                raise ValueError(f'invalid digit {c!r} at position {pos} for base {base}')
            accum.mul_ui(accum, base)
            accum.add_ui(accum, value)
        x.set(accum)
        accum.clear()
        return x

    # conversion

    def get_ui(x):
        if WANT_ASSERT:
            x._check()
            assert x.count == 1, 'value does not fit in one digit'
        return int(x._digits[0])

    def get_str(x, base=10):
        if WANT_ASSERT:
            x._check()
            assert MIN_BASE <= base <= MAX_BASE, base
        tail = BigInt(x)
        symbols = []
        while tail.cmp_ui(0):
            symbols.append(SYMBOLS[tail.div_ui(tail, base)])
        tail.clear()
        if not symbols:
            return SYMBOLS[0]
        return ''.join(reversed(symbols))

    def __int__(x):
        accum = 0
        for d in reversed(x._digits.load()):
            accum <<= DIGIT_BITS
            accum += d
        return accum

    # comparison

    def cmp(x, y):
        if WANT_ASSERT:
            x._check(y)
        if x.count != y.count:
            return _ordering(x.count, y.count)
        if x.xp is not y.xp:
            return _cmp_n(x._digits.load(), y._digits.load())
        xp = x.xp
        differ = xp.nonzero(x._digits.data != y._digits.data)[0]
        if differ.shape[0] == 0:
            return Ordering.EQUAL
        top = int(differ[-1])
        return _ordering(int(x._digits[top]), int(y._digits[top]))

    def cmp_ui(x, d):
        if WANT_ASSERT:
            x._check()
            assert _is_digit(d), d
        if x.count > 1:
            return Ordering.GREATER
        return _ordering(int(x._digits[0]), d)

    def equal_ui(x, d):
        return x.count == 1 and int(x._digits[0]) == d

    # arithmetic

    def add(r, x, y):
        if WANT_ASSERT:
            r._check(x, y)
        return r._store(_add_n(x._digits.load(), y._digits.load()))

    def add_ui(r, x, d):
        if WANT_ASSERT:
            r._check(x)
            assert _is_digit(d), d
        return r._store(_add_n(x._digits.load(), [d]))

    def sub(r, x, y):
        if WANT_ASSERT:
            r._check(x, y)
            assert x.cmp(y) >= 0, 'subtraction would be negative'
        return r._store(_sub_n(x._digits.load(), y._digits.load()))

    def sub_ui(r, x, d):
        if WANT_ASSERT:
            r._check(x)
            assert x.cmp_ui(d) >= 0, 'subtraction would be negative'
        return r._store(_sub_n(x._digits.load(), [d]))

    def mul(r, x, y):
        if WANT_ASSERT:
            r._check(x, y)
        return r._store(_mul_n(x._digits.load(), y._digits.load()))

    def mul_ui(r, x, d):
        if WANT_ASSERT:
            r._check(x)
            assert _is_digit(d), d
        # every digit * d fits in uint64; only the carries run serially
        xp = x.xp
        products = xp.astype(x._digits.data, xp.uint64) * int(d)
        lo = [int(p) for p in xp.unstack(products & DIGIT_MASK)]
        hi = [int(p) for p in xp.unstack(products >> DIGIT_BITS)]
        return r._store(_normalize(_carry_products(lo, hi)))

    def div(q, r, x, y):
        '''q = x // y, r = x % y. q and r must be distinct values.'''
        if WANT_ASSERT:
            q._check(r, x, y)
            assert q is not r, 'quotient and remainder share a value'
        if y.equal_ui(0):
            raise ZeroDivisionError('BigInt division by zero')
        xd = x._digits.load()
        yd = y._digits.load()
        if len(yd) == 1:
            qd, rem = _divrem_1(xd, yd[0])
            rd = [rem]
        elif _cmp_n(xd, yd) < 0:
            qd, rd = [0], xd
        else:
            qd, rd = _divrem_n(xd, yd)
        q._store(qd)
        r._store(rd)
        return q

    def div_ui(q, x, d):
        '''q = x // d, returns x % d.'''
        if WANT_ASSERT:
            q._check(x)
            assert _is_digit(d), d
        if d == 0:
            raise ZeroDivisionError('BigInt division by zero')
        qd, rem = _divrem_1(x._digits.load(), d)
        q._store(qd)
        return rem

    # diagnostics

    def debug(x):
        if WANT_ASSERT:
            x._check()
        digits = ','.join('%x' % d for d in x._digits.load())
        return '{count: %d, reserved: %d, digits: (%s)}' % (x.count, x.reserved, digits)

    def __repr__(self):
        return 'BigInt(0x' + self.get_str(16) + ')'
    def __str__(self):
        return self.get_str(10)
    def __bool__(self):
        return not self.equal_ui(0)
    __hash__ = None

    def _operand(x, y):
        '''y as a BigInt, or as a digit for the _ui forms. None if y is not a number.'''
        if type(y) is BigInt:
            return y, False
        try:
            y = operator.index(y)
        except TypeError:
            return None, False
        if _is_digit(y):
            return y, True
        return BigInt(y, xp=x.xp), False

    def __divmod__(x, y):
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        q = BigInt(xp=x.xp)
        if is_digit:
            return q, BigInt(q.div_ui(x, y), xp=x.xp)
        r = BigInt(xp=x.xp)
        q.div(r, x, y)
        return q, r
    def __floordiv__(x, y):
        result = x.__divmod__(y)
        return result if result is NotImplemented else result[0]
    def __mod__(x, y):
        result = x.__divmod__(y)
        return result if result is NotImplemented else result[1]
    def __ifloordiv__(x, y):
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        if is_digit:
            x.div_ui(x, y)
        else:
            x.div(BigInt(xp=x.xp), x, y)
        return x
    def __imod__(x, y):
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        if is_digit:
            return x.set_ui(BigInt(xp=x.xp).div_ui(x, y))
        BigInt(xp=x.xp).div(x, x, y)
        return x

def __BigIntOpAllocating(method):
    def op(x, y):
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        r = BigInt(xp=x.xp)
        return getattr(r, method + '_ui' if is_digit else method)(x, y)
    return op
def __BigIntOpInplace(method):
    def op(x, y):
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        return getattr(x, method + '_ui' if is_digit else method)(x, y)
    return op
def __BigIntOpReflected(opname):
    def op(x, y):
        y, _ = x._operand(y)
        if y is None:
            return NotImplemented
        return getattr(BigInt(y, xp=x.xp), opname)(x)
    return op
def __BigIntOpCompare(test):
    def op(x, y):
        if type(y) is not BigInt:
            try:
                if operator.index(y) < 0:
                    return test(Ordering.GREATER, 0)
            except TypeError:
                return NotImplemented
        y, is_digit = x._operand(y)
        if y is None:
            return NotImplemented
        return test(x.cmp_ui(y) if is_digit else x.cmp(y), 0)
    return op

for opname, method in [['add','add'], ['sub','sub'], ['mul','mul']]:
    setattr(BigInt, f'__{opname}__', __BigIntOpAllocating(method))
    setattr(BigInt, f'__i{opname}__', __BigIntOpInplace(method))
for opname in ['add', 'sub', 'mul', 'floordiv', 'mod', 'divmod']:
    setattr(BigInt, f'__r{opname}__', __BigIntOpReflected(f'__{opname}__'))
for opname in ['eq', 'ne', 'lt', 'le', 'gt', 'ge']:
    setattr(BigInt, f'__{opname}__', __BigIntOpCompare(getattr(operator, opname)))

if __name__ == '__main__':
    import array_api_strict as xp
    import random

    rng = random.Random(0)
    for idx in range(64):
        a = rng.getrandbits(rng.randrange(1, 300))
        b = rng.getrandbits(rng.randrange(1, 300)) + 1
        x = BigInt(a, xp=xp)
        y = BigInt(b, xp=xp)
        assert int(x + y) == a + b
        assert int(x * y) == a * b
        q, r = divmod(x, y)
        assert int(q) == a // b and int(r) == a % b
        assert BigInt(x.get_str(7), 7, xp=xp) == x
    print(BigInt('815915283247897734345611269596115894272000000000', xp=xp).debug())
