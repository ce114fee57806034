import logging
from functools import singledispatch
from numba import njit
from ..geometry import *

__all__ = ['gen_getsdb', 'get_cached_getsdb', 'getsdb', 'clear_cache']

logger = logging.getLogger(__name__)


@singledispatch
def gen_getsdb(surface):
    """Generate jitted getsdb(x) for surface and its descendants."""
    raise NotImplementedError(surface)


@njit
def _min(a, b):
    return min(a, b)


@njit
def _max(a, b):
    return max(a, b)


def gen_reduce_pairwise(op, funs):
    if len(funs) == 2:
        f0, f1 = funs
        @njit
        def result(x):
            return op(f0(x), f1(x))
    elif len(funs) == 3:
        f0, f1, f2 = funs
        @njit
        def result(x):
            return op(op(f0(x), f1(x)), f2(x))
    else:
        n = int(len(funs)/2)
        fa = gen_reduce_pairwise(op, funs[:n])
        fb = gen_reduce_pairwise(op, funs[n:])
        @njit
        def result(x):
            return op(fa(x), fb(x))
    return result


@gen_getsdb.register
def _(s: UnionOp):
    gs = tuple(get_cached_getsdb(child) for child in s.surfaces)
    return gen_reduce_pairwise(_min, gs)


@gen_getsdb.register
def _(s: IntersectionOp):
    gs = tuple(get_cached_getsdb(child) for child in s.surfaces)
    return gen_reduce_pairwise(_max, gs)


@gen_getsdb.register
def _(s: SubtractionOp):
    ga = get_cached_getsdb(s.a)
    gb = get_cached_getsdb(s.b)
    @njit
    def g(x):
        return max(-ga(x), gb(x))
    return g


def lookup_cache(cache: dict, key, calc_value):
    try:
        value = cache[key]
    except KeyError:
        value = calc_value()
        cache[key] = value

    return value


getsdb_cache = {}


def get_cached_getsdb(surface: Surface):
    def calc_value():
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('Generating getsdb for %s.', type(surface).__name__)
        return gen_getsdb(surface)
    return lookup_cache(getsdb_cache, surface, calc_value)


def clear_cache():
    getsdb_cache.clear()


def getsdb(surface: Surface, x) -> float:
    fun = get_cached_getsdb(surface)
    return fun(x)
