import argparse

from bigint import BigInt

def factorials(limit, *, xp=None):
    '''Yield (n, n!) for n = 1..limit. The same BigInt is updated in place.'''
    x = BigInt(1, xp=xp)
    for n in range(1, limit + 1):
        x.mul_ui(x, n)
        yield n, x

def main(argv=None):
    parser = argparse.ArgumentParser(description='Print n! for n up to a limit.')
    parser.add_argument('limit', type=int, nargs='?', default=40)
    parser.add_argument('--base', type=int, default=10)
    args = parser.parse_args(argv)
    x = None
    for n, x in factorials(args.limit):
        print('%d! = %s' % (n, x.get_str(args.base)))
    if x is not None:
        x.clear()

if __name__ == '__main__':
    main()
