"""
Property-based тесты CircularValue, ArcLength и Arc.
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from src.core.domain import DEFAULT_RANGES, Arc, ArcLength, CircularValue
from src.core.math.numerical_safeguards import EPS_ROUNDTRIP

ranges = st.sampled_from(DEFAULT_RANGES)
any_floats = st.floats(allow_nan=True, allow_infinity=True)
finite_floats = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)

# Сетка для дуг: старты L + i·R/GRID, длины j·R/GRID (j = GRID — ровно R)
GRID = 24


def grid_arc(rng, i, j):
    r = rng.circumference
    length = r if j == GRID else j * r / GRID
    return Arc(rng.lower + i * r / GRID, length, rng)


grid_arcs = st.integers(0, GRID - 1), st.integers(0, GRID)


# =============================================================================
# CIRCULAR VALUE
# =============================================================================


@given(rng=ranges, raw=any_floats)
def test_value_always_in_domain(rng, raw):
    """CircularValue(x) ∈ [L, H) для любого x"""
    value = CircularValue(raw, rng).value
    assert rng.lower <= value < rng.upper


@given(rng=ranges, raw=finite_floats)
def test_wrap_is_idempotent(rng, raw):
    """Нормализованное значение не изменяется при повторной нормализации"""
    value = CircularValue(raw, rng)
    assert CircularValue(value.value, rng).value == value.value


@given(rng=ranges, x=finite_floats, y=finite_floats)
def test_pdist_properties(rng, x, y):
    """pdist(a, a) = 0; pdist(a, b) + pdist(b, a) = R при a != b"""
    a = CircularValue(x, rng)
    b = CircularValue(y, rng)
    r = rng.circumference

    assert CircularValue.pdist(a, a) == 0.0
    assert 0.0 <= CircularValue.pdist(a, b) < r
    if a != b:
        total = CircularValue.pdist(a, b) + CircularValue.pdist(b, a)
        assert abs(total - r) <= EPS_ROUNDTRIP * r


@given(rng=ranges, x=finite_floats, y=finite_floats)
def test_sdist_properties(rng, x, y):
    """sdist ∈ (-R/2, R/2]; антисимметрия вне антипода; антипод — +R/2"""
    a = CircularValue(x, rng)
    b = CircularValue(y, rng)
    half = rng.half_circumference

    d_ab = CircularValue.sdist(a, b)
    d_ba = CircularValue.sdist(b, a)

    assert -half < d_ab <= half
    if d_ab == half:
        assert d_ba == half
    else:
        assert d_ba == -d_ab


@given(source=ranges, target=ranges, raw=finite_floats)
def test_conversion_round_trip(source, target, raw):
    """Range1 → Range2 → Range1 возвращает исходное значение"""
    original = CircularValue(raw, source)
    back = original.to_range(target).to_range(source)
    assert abs(CircularValue.sdist(original, back)) <= EPS_ROUNDTRIP * source.circumference


@given(rng=ranges, x=finite_floats, y=finite_floats)
def test_add_difference_restores(rng, x, y):
    """a + (b - a) == b"""
    a = CircularValue(x, rng)
    b = CircularValue(y, rng)
    restored = a + (b - a)
    assert abs(CircularValue.sdist(restored, b)) <= EPS_ROUNDTRIP * rng.circumference


# =============================================================================
# ARC LENGTH
# =============================================================================


@given(rng=ranges, raw=any_floats)
def test_length_always_clamped(rng, raw):
    """ArcLength(x) ∈ [0, R] для любого x"""
    assert 0.0 <= ArcLength(raw, rng).value <= rng.circumference


@given(source=ranges, target=ranges)
def test_full_circle_preserved(source, target):
    """Полная окружность остаётся полной после конверсии"""
    assert ArcLength.full_circle(source).to_range(target).is_full_circle


# =============================================================================
# ARC
# =============================================================================


@given(rng=ranges, start=finite_floats)
def test_point_arc(rng, start):
    """Дуга l = 0: c1 == c2, содержит свою точку"""
    arc = Arc(start, 0.0, rng)
    assert arc.start == arc.end
    assert arc.contains(arc.start)
    assert arc.contains(arc)


@given(rng=ranges, start=finite_floats, point=finite_floats, other_start=finite_floats,
       other_length=st.floats(min_value=0.0, max_value=1e6))
def test_full_arc_contains_everything(rng, start, point, other_start, other_length):
    """Дуга l = R содержит любую точку и дугу и равна любой полной дуге"""
    full = Arc(start, rng.circumference, rng)
    assert full.contains(point)
    assert full.contains(Arc(other_start, other_length, rng))
    assert full == Arc(other_start, rng.circumference, rng)


@given(rng=ranges, start=finite_floats, fraction=st.floats(min_value=0.0, max_value=1.0))
def test_arc_contains_endpoints(rng, start, fraction):
    """Дуга содержит свои концы"""
    arc = Arc(start, fraction * rng.circumference, rng)
    assert arc.contains(arc.start)
    assert arc.contains(arc.end)


@given(rng=ranges, x=finite_floats, y=finite_floats)
def test_from_endpoints_length_is_pdist(rng, x, y):
    """from_endpoints: l = pdist(start, end)"""
    arc = Arc.from_endpoints(x, y, rng)
    assert arc.length.value == CircularValue.pdist(arc.start, CircularValue(y, rng))


@given(rng=ranges, x=finite_floats, y=finite_floats)
def test_from_endpoints_never_full_circle(rng, x, y):
    """from_endpoints никогда не строит полную окружность"""
    assert not Arc.from_endpoints(x, y, rng).is_full_circle


@settings(max_examples=300)
@given(rng=ranges, a=st.tuples(*grid_arcs), b=st.tuples(*grid_arcs))
def test_mutual_containment_iff_equal(rng, a, b):
    """a.contains(b) and b.contains(a) <=> a == b"""
    arc_a = grid_arc(rng, *a)
    arc_b = grid_arc(rng, *b)
    assert (arc_a.contains(arc_b) and arc_b.contains(arc_a)) == (arc_a == arc_b)


@given(rng=ranges, a=st.tuples(*grid_arcs), b=st.tuples(*grid_arcs))
def test_intersects_symmetric_and_implied_by_containment(rng, a, b):
    """Пересечение симметрично; содержание влечёт пересечение"""
    arc_a = grid_arc(rng, *a)
    arc_b = grid_arc(rng, *b)
    assert arc_a.intersects(arc_b) == arc_b.intersects(arc_a)
    if arc_a.contains(arc_b):
        assert arc_a.intersects(arc_b)


@given(source=ranges, target=ranges, a=st.tuples(*grid_arcs))
def test_arc_conversion_round_trip(source, target, a):
    """Дуга, сконвертированная туда и обратно, близка к исходной"""
    assume(source != target)
    arc = grid_arc(source, *a)
    back = arc.to_range(target).to_range(source)

    tolerance = EPS_ROUNDTRIP * source.circumference
    assert back.is_full_circle == arc.is_full_circle
    assert abs(CircularValue.sdist(back.start, arc.start)) <= tolerance
    assert abs(back.length.value - arc.length.value) <= tolerance
