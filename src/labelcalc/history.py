from collections import deque, namedtuple


class HistoryEntry(namedtuple('HistoryEntry', 'tokens result')):
    '''
    Snapshot of a finished calculation: its tokens and the result text.
    '''
    __slots__ = ()

    def __new__(cls, tokens, result):
        return super().__new__(cls, tuple(token.copy() for token in tokens),
                               result)


class History:
    '''
    Bounded log of calculations, most recent first.
    '''

    LIMIT = 50

    def __init__(self, limit=None):
        self.entries = deque(maxlen=limit or type(self).LIMIT)

    @property
    def limit(self):
        return self.entries.maxlen

    def push(self, tokens, result):
        '''
        Record a calculation, evicting the oldest entry when full.
        '''
        entry = HistoryEntry(tokens, result)
        self.entries.appendleft(entry)
        return entry

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __bool__(self):
        return bool(self.entries)
