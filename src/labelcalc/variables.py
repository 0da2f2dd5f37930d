from collections import namedtuple
import time

from .formatter import parse_number
from .tokens import coerce_color
from .util import CalcError


SavedVariable = namedtuple('SavedVariable', 'label value unit color timestamp')
SavedVariable.__new__.__defaults__ = (None, None, 0)


class Variables:
    '''
    Named values, unique by label, kept newest-first.
    '''

    def __init__(self):
        self.saved = []
        self._last_stamp = 0

    def _stamp(self):
        '''
        Strictly increasing nanosecond timestamp.
        '''
        self._last_stamp = max(time.time_ns(), self._last_stamp + 1)
        return self._last_stamp

    def save(self, label, value, unit=None, color=None):
        '''
        Save value under label, replacing any variable already named so.
        '''
        if not label:
            raise CalcError('Variable needs a label')
        parse_number(value)
        variable = SavedVariable(label, value, unit or None,
                                 coerce_color(color), self._stamp())
        self.saved = [saved for saved in self.saved if saved.label != label]
        self.saved.append(variable)
        self.saved.sort(key=lambda saved: saved.timestamp, reverse=True)
        return variable

    def delete(self, label):
        self.saved = [saved for saved in self.saved if saved.label != label]

    def __getitem__(self, label):
        for saved in self.saved:
            if saved.label == label:
                return saved
        raise KeyError(label)

    def __contains__(self, label):
        return any(saved.label == label for saved in self.saved)

    def __len__(self):
        return len(self.saved)

    def __iter__(self):
        return iter(self.saved)
