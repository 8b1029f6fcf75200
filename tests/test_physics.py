import math

import pytest

from pendulum_core.constants import DAMPING, GRAVITY, TICK_DT
from pendulum_core.data_models import Link
from pendulum_core.physics import PendulumChain, two_link_accelerations


def make_chain(a1, a2, w1=0.0, w2=0.0, l1=1.0, l2=1.0, m1=1.0, m2=1.0):
    return PendulumChain([
        Link(a1, l1, m1, angular_velocity=w1),
        Link(a2, l2, m2, angular_velocity=w2),
    ])


def test_default_chain():
    chain = PendulumChain()
    assert chain.angles() == (math.pi / 4, math.pi / 4)
    assert chain.angular_velocities() == (0.0, 0.0)
    assert [(l.length, l.mass) for l in chain.links] == [(1.0, 1.0), (1.0, 1.0)]


@pytest.mark.parametrize("n", [0, 1, 3])
def test_chain_requires_two_links(n):
    with pytest.raises(ValueError):
        PendulumChain([Link(0.0) for _ in range(n)])


def test_link_length_and_mass_are_fixed():
    link = Link(0.3, 2.0, 3.0)
    with pytest.raises(AttributeError):
        link.length = 1.0
    with pytest.raises(AttributeError):
        link.mass = 1.0
    link.angle = 1.0
    link.angular_velocity = 2.0
    assert (link.angle, link.angular_velocity) == (1.0, 2.0)


def test_link_rejects_non_positive_length():
    with pytest.raises(ValueError):
        Link(0.0, 0.0, 1.0)


def test_forward_kinematics_hanging_straight_down():
    chain = make_chain(0.0, 0.0, l1=1.5, l2=0.5)
    (x1, y1), (x2, y2) = chain.forward_kinematics()
    assert (x1, y1) == (0.0, -1.5)
    assert (x2, y2) == (0.0, -2.0)


def test_forward_kinematics_walks_the_chain():
    chain = make_chain(math.pi / 2, 0.0)
    (x1, y1), (x2, y2) = chain.forward_kinematics()
    assert (x1, y1) == pytest.approx((1.0, 0.0))
    assert (x2, y2) == pytest.approx((1.0, -1.0))
    assert chain.end_effector() == pytest.approx((1.0, -1.0))


def test_accelerations_at_rest_in_equilibrium_are_zero():
    assert two_link_accelerations(Link(0.0), Link(0.0), GRAVITY) == pytest.approx((0.0, 0.0))


def test_single_step_golden_values():
    chain = PendulumChain()
    chain.integrate(TICK_DT, GRAVITY, DAMPING)

    # With both links at the same angle and at rest, the outer acceleration
    # vanishes and the inner one reduces to -g * sin(a1).
    expected_w1 = -GRAVITY * math.sin(math.pi / 4) * TICK_DT * DAMPING
    expected_a1 = math.pi / 4 + expected_w1 * TICK_DT

    w1, w2 = chain.angular_velocities()
    a1, a2 = chain.angles()
    assert w1 == pytest.approx(expected_w1, rel=1e-12)
    assert w1 == pytest.approx(-0.110976381628, rel=1e-9)
    assert a1 == pytest.approx(0.783622541291, rel=1e-9)
    assert a1 == pytest.approx(expected_a1, rel=1e-12)
    assert w2 == 0.0
    assert a2 == math.pi / 4


def test_integrate_is_deterministic():
    a, b = PendulumChain(), PendulumChain()
    for _ in range(500):
        a.integrate(TICK_DT, GRAVITY, DAMPING)
        b.integrate(TICK_DT, GRAVITY, DAMPING)
    assert a.angles() == b.angles()
    assert a.angular_velocities() == b.angular_velocities()


def test_semi_implicit_order_uses_updated_velocity():
    # No gravity, aligned links: accelerations are zero, so only damping acts
    chain = make_chain(0.2, 0.2, w1=1.0, w2=1.0)
    chain.integrate(0.1, 0.0, 0.5)
    assert chain.angular_velocities() == pytest.approx((0.5, 0.5))
    assert chain.angles() == pytest.approx((0.25, 0.25))


def test_damping_strictly_reduces_speed_each_tick():
    chain = make_chain(0.0, 0.0, w1=2.0, w2=2.0)
    speeds = []
    for _ in range(1000):
        chain.integrate(TICK_DT, 0.0, DAMPING)
        speeds.append(abs(chain.inner.angular_velocity) + abs(chain.outer.angular_velocity))
    assert all(later < earlier for earlier, later in zip(speeds, speeds[1:]))
    assert speeds[-1] == pytest.approx(4.0 * DAMPING ** 1000)


def test_energy_decays_under_damping():
    chain = PendulumChain()
    start = chain.total_energy(GRAVITY)
    for _ in range(3000):
        chain.integrate(TICK_DT, GRAVITY, 0.99)
    end = chain.total_energy(GRAVITY)
    resting = -GRAVITY * (1.0 * 2.0 + 1.0 * 1.0)
    assert end < start - 1.0
    assert end >= resting - 1e-6


def test_total_energy_at_rest_is_potential_only():
    chain = make_chain(0.0, 0.0)
    assert chain.total_energy(GRAVITY) == pytest.approx(-3.0 * GRAVITY)


def test_override_last_angle_leaves_inner_link():
    chain = make_chain(0.4, 0.1, w1=1.5, w2=-2.0)
    chain.override_last_angle(2.0)
    assert chain.outer.angle == 2.0
    assert chain.outer.angular_velocity == 0.0
    assert chain.inner.angle == 0.4
    assert chain.inner.angular_velocity == 1.5


def test_reset_zeroes_velocities():
    chain = make_chain(0.4, 0.1, w1=1.5, w2=-2.0)
    chain.reset([1.0, -1.0])
    assert chain.angles() == (1.0, -1.0)
    assert chain.angular_velocities() == (0.0, 0.0)


def test_non_finite_state_propagates():
    chain = make_chain(float("nan"), 0.0)
    chain.integrate(TICK_DT, GRAVITY, DAMPING)
    assert math.isnan(chain.inner.angle)


def closed_form(a1, a2, w1, w2, l1, l2, m1, m2, g):
    den = 2 * m1 + m2 - m2 * math.cos(2 * a1 - 2 * a2)
    acc1 = (-g * (2 * m1 + m2) * math.sin(a1)
            - m2 * g * math.sin(a1 - 2 * a2)
            - 2 * math.sin(a1 - a2) * m2 * (w2 ** 2 * l2 + w1 ** 2 * l1 * math.cos(a1 - a2))) / (l1 * den)
    acc2 = (2 * math.sin(a1 - a2)
            * (w1 ** 2 * l1 * (m1 + m2) + g * (m1 + m2) * math.cos(a1) + w2 ** 2 * l2 * m2 * math.cos(a1 - a2))) / (l2 * den)
    return acc1, acc2


ASYMMETRIC = dict(a1=0.7, a2=-0.4, w1=1.3, w2=-2.1, l1=1.2, l2=0.8, m1=0.5, m2=2.0)


def test_accelerations_match_closed_form_for_moving_asymmetric_chain():
    s = ASYMMETRIC
    chain = make_chain(**s)
    got = two_link_accelerations(chain.inner, chain.outer, GRAVITY)
    expected = closed_form(g=GRAVITY, **s)
    assert got == pytest.approx(expected, rel=1e-12)
    # velocity-dependent terms contribute: zeroing velocities changes the result
    at_rest = closed_form(**dict(s, w1=0.0, w2=0.0), g=GRAVITY)
    assert abs(got[0] - at_rest[0]) > 0.1
    assert abs(got[1] - at_rest[1]) > 0.1


@pytest.mark.parametrize("l1, l2, m1, m2", [(1.0, 1.0, 1.0, 1.0), (0.6, 1.4, 3.0, 0.25)])
def test_accelerations_match_closed_form_for_other_geometries(l1, l2, m1, m2):
    a1, a2, w1, w2 = -1.1, 2.3, -0.8, 0.45
    chain = make_chain(a1, a2, w1=w1, w2=w2, l1=l1, l2=l2, m1=m1, m2=m2)
    got = two_link_accelerations(chain.inner, chain.outer, GRAVITY)
    assert got == pytest.approx(closed_form(a1, a2, w1, w2, l1, l2, m1, m2, GRAVITY), rel=1e-12)


def test_integrate_from_moving_asymmetric_chain():
    s = ASYMMETRIC
    chain = make_chain(**s)
    acc1, acc2 = closed_form(g=GRAVITY, **s)

    chain.integrate(TICK_DT, GRAVITY, DAMPING)

    w1 = (s["w1"] + acc1 * TICK_DT) * DAMPING
    w2 = (s["w2"] + acc2 * TICK_DT) * DAMPING
    assert chain.angular_velocities() == pytest.approx((w1, w2), rel=1e-12)
    assert chain.angles() == pytest.approx((s["a1"] + w1 * TICK_DT, s["a2"] + w2 * TICK_DT), rel=1e-12)
