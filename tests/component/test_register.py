import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvtally.component.core
import rcvtally.component.elimination
import rcvtally.component.pairwin_scorer


def test_mark_registers_by_name():
    register = rcvtally.component.core.Register('test policy')

    @register.mark
    def pick_first(tied, active):
        return list(tied)[:1]

    assert register == {'pick_first': pick_first}
    assert register.lookup('pick_first') is pick_first
    assert register.construct('pick_first') is pick_first


def test_lookup_unknown_names_kind():
    register = rcvtally.component.core.Register('test policy')
    register.mark(len)
    with pytest.raises(KeyError) as excinfo:
        register.lookup('nothing')
    assert 'unknown test policy: nothing (known: len)' in str(excinfo.value)


def test_construct_passes_callables():
    register = rcvtally.component.core.Register('test policy')
    assert register.construct(max) is max
    with pytest.raises(KeyError):
        register.construct('max')


@pytest.mark.parametrize(('register', 'kind'), [
    (rcvtally.component.elimination.ELIMINATION_POLICIES,
     'elimination policy'),
    (rcvtally.component.pairwin_scorer.PAIRWIN_SCORERS,
     'pairwise win scorer'),
])
def test_component_registers(register, kind):
    assert isinstance(register, rcvtally.component.core.Register)
    assert register.kind == kind
    for name, func in register.items():
        assert func.__name__ == name
