from pytest import Item, fixture

from supercalc.environment import Environment


@fixture
def environment():
    '''
    Fresh environment: just pi and e, default precision.
    '''
    return Environment()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Only active with enable_assertion_pass_hook; use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          # Drop pytest's -vv hint lines.
          '\n'.join(str(expl).splitlines()[:-2]))
