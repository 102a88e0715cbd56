import logging

logger = logging.getLogger(__name__)


class Timers:
    """
    delay and sound timers, both count down to zero at 60Hz

    the sound is ON as long as the sound timer is non-zero; on_sound_start and
    on_sound_stop are called once on each transition so an audio adapter can
    start and stop the tone
    """
    def __init__(self, on_sound_start=None, on_sound_stop=None):
        self.delay = 0      # delay timer, active when non-zero
        self._sound = 0     # sound timer, active when non-zero
        self.on_sound_start = on_sound_start
        self.on_sound_stop = on_sound_stop

    def __str__(self):
        return f"DT:{self.delay} | ST:{self._sound}"

    @property
    def sound(self):
        return self._sound

    @sound.setter
    def sound(self, value):
        was_active = self._sound > 0
        self._sound = value & 0xFF
        if not was_active and self._sound > 0:
            self._notify(self.on_sound_start, "start")
        elif was_active and self._sound == 0:
            self._notify(self.on_sound_stop, "stop")

    @property
    def beeping(self):
        return self._sound > 0

    def set_delay(self, value):
        self.delay = value & 0xFF

    def tick(self):
        """decrement both timers by one step, to be called at 60Hz"""
        if self.delay > 0:
            self.delay -= 1
        if self._sound > 0:
            self._sound -= 1
            if self._sound == 0:
                self._notify(self.on_sound_stop, "stop")

    def reset(self):
        self.delay = 0
        self.sound = 0

    @staticmethod
    def _notify(callback, what):
        logger.debug("sound %s", what)
        if callback is not None:
            callback()
