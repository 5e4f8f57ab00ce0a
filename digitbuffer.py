from bigint_config import WANT_ASSERT, digit_dtype

def grow_capacity(capacity, length):
    # doubling keeps a run of appends at O(1) reallocations per digit
    capacity = max(capacity, 1)
    while capacity < length:
        capacity *= 2
    return capacity

class DigitBuffer:
    '''Growable run of digits, least significant first.

    Slots [length, capacity) are always zero. Only resize() changes the
    capacity and it never gives storage back.
    '''
    def __init__(self, xp, length=1):
        self.xp = xp
        self.storage = xp.zeros(1, dtype=digit_dtype(xp))
        self.capacity = 1
        self.length = 1
        if length != 1:
            self.resize(length)

    @property
    def data(self):
        return self.storage[:self.length]

    def __getitem__(self, idcs):
        return self.data[idcs]
    def __repr__(self):
        if self.storage is None:
            return 'DigitBuffer(released)'
        return 'DigitBuffer(length=%d, capacity=%d)' % (self.length, self.capacity)

    def ok(self):
        if self.storage is None:
            return False
        if self.length < 1 or self.capacity < self.length:
            return False
        if self.storage.shape[0] != self.capacity:
            return False
        return not bool(self.xp.any(self.storage[self.length:]))

    def _reserve(self, length):
        xp = self.xp
        capacity = grow_capacity(self.capacity, length)
        if capacity != self.capacity:
            storage = xp.zeros(capacity, dtype=self.storage.dtype)
            return [storage, capacity]
        else:
            return [self.storage, self.capacity]

    def resize(self, length):
        if WANT_ASSERT:
            assert self.ok()
            assert length >= 1
        storage, capacity = self._reserve(length)
        if storage is not self.storage:
            storage[:self.length] = self.storage[:self.length]
            self.storage = storage
            self.capacity = capacity
        elif length < self.length:
            self.storage[length:self.length] = 0
        self.length = length
        if WANT_ASSERT:
            assert self.ok()

    def load(self):
        '''The significant digits as python ints.'''
        return [int(d) for d in self.xp.unstack(self.data)]

    def store(self, digits):
        '''Replace the contents with the given digits, already normalized.'''
        self.resize(len(digits))
        self.storage[:self.length] = self.xp.asarray(digits, dtype=self.storage.dtype)
        if WANT_ASSERT:
            assert self.ok()

    def release(self):
        self.storage = None
        self.length = 0
        self.capacity = 0
