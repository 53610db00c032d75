r"""
Delayed negative feedback

    dx/dt = -x(t) - p * tanh(x(t - tau))

The trivial equilibrium x = 0 is stable for small feedback strength p and
loses stability in a Hopf bifurcation where a pair of roots of the
characteristic equation crosses the imaginary axis. We follow the equilibrium
with a naive parameter sweep and watch min_w |Delta(iw)|, which drops to zero
at the crossing.
"""

from pathlib import Path

import jax.numpy as jnp
import matplotlib.pyplot as plt
import numpy as np
import scipy.optimize

from ddebif import AttributeLens, DelayEquilibriumProblem, characteristic_matrix, jacobian, residual
from ddebif.core.types import Params


class FeedbackParameters:
    def __init__(self, p: float = 0.5, tau: float = 2.0) -> None:
        self.p = p
        self.tau = tau


def F(x, xd, par):
    return -x - par.p * jnp.tanh(xd[0])


def delays(delays0, par):
    return [par.tau]


problem = DelayEquilibriumProblem.from_function(
    F, delays, np.array([0.1]), [2.0], FeedbackParameters(), AttributeLens("p")
)
print(problem)

# frequencies at which the characteristic matrix is scanned for crossing roots
omegas = np.linspace(1e-3, 3.0, 600)


def distance_to_crossing(x, par: Params) -> float:
    return min(abs(np.linalg.det(characteristic_matrix(problem, x, par, 1j * w))) for w in omegas)


ps = np.linspace(0.5, 2.0, 31)
x = problem.u0
distances = []
for value in ps:
    par = problem.set_param(value)
    sol = scipy.optimize.root(lambda u: residual(problem, u, par), x, jac=lambda u: jacobian(problem, u, par).Jall)
    x = sol.x
    distances.append(distance_to_crossing(x, par))
    print(f"p: {value:5.2f}  |x|: {problem.record_from_solution(x, par):.2e}  min|Delta(iw)|: {distances[-1]:.3e}")

fig, ax = plt.subplots()
ax.plot(ps, distances)
ax.set_xlabel(f"parameter {problem.lens.symbol}")
ax.set_ylabel(r"$\min_\omega |\det \Delta(i\omega)|$")
fig.savefig(Path(__file__).with_suffix(".png"))
plt.show(block=True)
