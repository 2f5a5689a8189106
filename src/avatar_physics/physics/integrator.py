"""Time integration for the mass-spring system."""

from avatar_physics.physics.mass_points import MassPointSet


class SemiImplicitEulerIntegrator:
    """Symplectic Euler step with uniform multiplicative damping.

    For every free point::

        acceleration = force / mass
        velocity     = (velocity + acceleration * dt) * damping
        position     = position + velocity * dt

    The updated velocity is used for the position update. Fixed points are
    left untouched.
    """

    def integrate(self, points: MassPointSet, dt: float, damping: float) -> None:
        """Advance velocities and positions of free points by ``dt``.

        Args:
            points: Mass points to advance
            dt: Time step in seconds
            damping: Velocity multiplier applied after the force update
        """
        free = points.free
        if not free.any():
            return

        acceleration = points.forces[free] / points.masses[free][:, None]

        velocity = points.velocities[free] + acceleration * dt
        velocity *= damping

        points.velocities[free] = velocity
        points.positions[free] += velocity * dt
