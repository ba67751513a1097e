class SilenceGate:
    """Tracks whether the input has gone quiet.

    Enters silence only after ``level_db`` stays below ``silence_db`` for
    ``timeout`` seconds; any louder block leaves it immediately.
    """

    def __init__(self, silence_db=-70.0, timeout=0.75):
        self.silence_db = silence_db
        self.timeout = timeout
        self.is_silent = False
        self.last_non_silent_time = None

    def update(self, level_db, now):
        """Returns True on entering silence, False on resuming, None otherwise."""
        if self.last_non_silent_time is None:
            self.last_non_silent_time = now

        if level_db < self.silence_db:
            if not self.is_silent and (now - self.last_non_silent_time) >= self.timeout:
                self.is_silent = True
                return True
            return None

        self.last_non_silent_time = now
        if self.is_silent:
            self.is_silent = False
            return False
        return None
