import argparse
from timeit import timeit

from bigint import BigInt
from bigint_config import DIGIT_MASK

UINT64_MASK = (1 << 64) - 1

def splitmix64(state):
    '''One SplitMix64 step. Returns (value, new_state).'''
    state = (state + 0x9E3779B97F4A7C15) & UINT64_MASK
    rnd = state
    rnd = ((rnd ^ (rnd >> 30)) * 0xBF58476D1CE4E5B9) & UINT64_MASK
    rnd = ((rnd ^ (rnd >> 27)) * 0x94D049BB133111EB) & UINT64_MASK
    rnd ^= rnd >> 31
    return rnd, state

def seed_digits(count, state=0):
    '''Pseudo-random multipliers a, addends b and a start digit x.'''
    a = []
    b = []
    for idx in range(count):
        rnd, state = splitmix64(state)
        a.append(rnd & DIGIT_MASK)
        rnd, state = splitmix64(state)
        b.append(rnd & DIGIT_MASK)
    rnd, state = splitmix64(state)
    return a, b, rnd & DIGIT_MASK

def fold(a, b, x, *, xp=None, out=None):
    # r = a * r + b for each pair
    r = BigInt(x, xp=xp)
    for ai, bi in zip(a, b):
        if out is not None:
            out('r = ' + r.debug())
            out('a = %xu, b = %xu' % (ai, bi))
        r.mul_ui(r, ai)
        r.add_ui(r, bi)
    return r

def benchmark(a, b, x, *, xp=None, out=print):
    r = fold(a, b, x, xp=xp, out=out)
    out(r.debug())
    return r

def main(argv=None):
    parser = argparse.ArgumentParser(description='Fold pseudo-random digits through r = a*r + b.')
    parser.add_argument('--count', type=int, default=10, help='Digit pairs to fold.')
    parser.add_argument('--seed', type=int, default=0, help='SplitMix64 start state.')
    parser.add_argument('--time', type=int, default=0, metavar='N',
                        help='Also time N silent folds.')
    args = parser.parse_args(argv)

    a, b, x = seed_digits(args.count, args.seed)
    r = benchmark(a, b, x)
    r.clear()
    if args.time:
        print('fold', timeit(lambda: fold(a, b, x).clear(), number=args.time))

if __name__ == '__main__':
    main()
