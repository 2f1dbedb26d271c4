'''Named registers of component callables.

Elimination policies and pairwise win scorers are plain functions kept in
a :class:`Register` under their function names, so that evaluators can be
configured (and persisted) by name as well as by a custom callable.
'''

from typing import Callable, Union


class Register(dict):
    '''Component callables of one kind, keyed by their names.

    :param kind: What the callables are (e.g. ``'elimination policy'``);
        used in error messages.
    '''
    def __init__(self, kind: str):
        super().__init__()
        self.kind = kind

    def mark(self, func: Callable) -> Callable:
        '''Register a function under its own name. Usable as a decorator.'''
        self[func.__name__] = func
        return func

    def lookup(self, name: str) -> Callable:
        '''Return a registered function by its name.

        :raises KeyError: If no function of that name is registered.
        '''
        try:
            return self[name]
        except KeyError:
            known = ', '.join(sorted(self))
            raise KeyError(f'unknown {self.kind}: {name} (known: {known})')

    def construct(self, func_def: Union[str, Callable]) -> Callable:
        '''Resolve a name to a registered function; pass callables through.'''
        return func_def if callable(func_def) else self.lookup(func_def)
