from contextlib import ContextDecorator
from tokenledger.events import EventLog

# Ledger operations never call each other through the context, so the stack stays shallow
MAX_CONTEXT_DEPTH = 64


class Context:
    def __init__(self, base_state, maxlen=MAX_CONTEXT_DEPTH):
        self._state = []
        self._base_state = base_state
        self._maxlen = maxlen

    def _get_state(self):
        if len(self._state) == 0:
            return self._base_state
        return self._state[-1]

    def _add_state(self, state: dict):
        assert len(self._state) < self._maxlen, 'Context stack exhausted.'
        self._state.append(state)

    def _pop_state(self):
        if len(self._state) > 0:
            self._state.pop(-1)

    def _reset(self):
        self._state = []

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']


_context = Context({
        'this': None,
        'caller': None,
        'signer': None
    })


class Runtime:
    """
    Process-wide execution state.

    ``events`` is one sink shared by every ledger. The executor clears it
    before each invocation and drains it into the output record. Code that
    calls a ``Ledger`` directly, outside the executor, owns the sink instead
    and must ``rt.events.drain()`` (or ``rt.set_up()``) after each operation,
    otherwise events of successive operations accumulate.
    """
    env = {}

    context = _context

    events = EventLog()

    @classmethod
    def set_up(cls):
        cls.context._reset()
        cls.events.clear()

    @classmethod
    def clean_up(cls):
        cls.context._reset()
        cls.events.clear()

    @classmethod
    def emit(cls, event):
        cls.events.emit(event)


rt = Runtime()


class calling(ContextDecorator):
    """
    Makes ``caller`` the invoking identity for the duration of the block.
    The signer is inherited from the enclosing state unless given.
    """
    def __init__(self, caller, this=None, signer=None):
        self.caller = caller
        self.this = this
        self.signer = signer

    def __enter__(self):
        current_state = rt.context._get_state()

        state = {
            'caller': self.caller,
            'signer': self._first_set(self.signer, current_state['signer'], self.caller),
            'this': self._first_set(self.this, current_state['this'])
        }

        rt.context._add_state(state)
        return rt.context

    def __exit__(self, *args, **kwargs):
        rt.context._pop_state()

    @staticmethod
    def _first_set(*values):
        # Identities such as 0 or '' are falsy but still set
        for value in values:
            if value is not None:
                return value
        return None
