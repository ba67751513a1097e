"""Object reuse for short-lived render objects.

Particles are spawned on every peak; pooling them keeps the frame loop from
allocating a fresh object per sparkle.
"""


class ObjectPool:
    """Fixed-factory pool.

    Args:
        factory:      zero-argument callable creating a new object
        initial_size: objects created up front
        max_size:     objects kept on release; extras are dropped
    """

    def __init__(self, factory, initial_size=50, max_size=500):
        self.factory = factory
        self.max_size = max_size
        self.pool = [factory() for _ in range(initial_size)]
        self.active_count = 0

    def acquire(self):
        self.active_count += 1
        if self.pool:
            return self.pool.pop()
        # exhausted
        return self.factory()

    def release(self, obj):
        self.active_count = max(0, self.active_count - 1)
        if len(self.pool) < self.max_size:
            reset = getattr(obj, "reset", None)
            if callable(reset):
                reset()
            self.pool.append(obj)

    def release_all(self, objects):
        for obj in objects:
            self.release(obj)

    def get_stats(self):
        return {
            "available": len(self.pool),
            "active": self.active_count,
            "max_size": self.max_size,
        }

    def clear(self):
        self.pool.clear()
        self.active_count = 0


class Particle:
    __slots__ = ("x", "y", "vx", "vy", "life", "max_life", "size", "color", "active")

    def __init__(self):
        self.reset()

    def reset(self):
        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.life = 1.0
        self.max_life = 1.0
        self.size = 5.0
        self.color = (255, 255, 255, 255)
        self.active = False

    def init(self, x, y, vx, vy, life, size, color):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.life = life
        self.max_life = life
        self.size = size
        self.color = color
        self.active = True

    def update(self, dt=1.0):
        """Advance one step; returns False once the particle has expired."""
        if not self.active:
            return False

        self.x += self.vx * dt
        self.y += self.vy * dt
        self.life -= dt * 0.016  # ~60 fps steps

        if self.life <= 0:
            self.active = False
            return False
        return True

    @property
    def fade(self):
        return max(0.0, self.life / self.max_life) if self.max_life > 0 else 0.0


particle_pool = ObjectPool(Particle, initial_size=100, max_size=1000)
