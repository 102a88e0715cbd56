"""pygame adapters: the screen renderer, the keyboard input and the beeper"""
import logging
import os
from array import array

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_1, K_2, K_3, K_4,
    K_q, K_w, K_e, K_r,
    K_a, K_s, K_d, K_f,
    K_z, K_x, K_c, K_v,
)

from .constants import BLUE, LIGHT_BLUE, SAMPLE_RATE, SCALE, SCREEN_HEIGHT, SCREEN_WIDTH, TONE_HZ

logger = logging.getLogger(__name__)

# COSMAC VIP keypad layout mapped onto the left side of a QWERTY keyboard
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_MAPPINGS = {
    K_1: 0x1, K_2: 0x2, K_3: 0x3, K_4: 0xC,
    K_q: 0x4, K_w: 0x5, K_e: 0x6, K_r: 0xD,
    K_a: 0x7, K_s: 0x8, K_d: 0x9, K_f: 0xE,
    K_z: 0xA, K_x: 0x0, K_c: 0xB, K_v: 0xF,
}


# ******************** VIDEO
class Screen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE, surface=None):
        self.w, self.h, self.scale = w, h, s
        self.background = pygame.Color(*bg_color)
        self.foreground = pygame.Color(*fg_color)
        if surface is None:
            surface = pygame.display.set_mode((w * self.scale, h * self.scale))
        self.surface = surface
        self.surface.fill(self.background)

    def render(self, display):
        """draw the whole display buffer and mark it as consumed"""
        self.surface.fill(self.background)
        for y, row in enumerate(display.rows()):
            for x, pixel in enumerate(row):
                if pixel:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )
        display.mark_clean()
        self.refresh()

    @staticmethod
    def refresh():
        if pygame.display.get_surface() is not None:
            pygame.display.flip()


# ******************** INPUT
class Keyboard:
    """translate pygame keyboard events into keypad state changes"""
    def __init__(self, keypad, mappings=None):
        self.keypad = keypad
        self.mappings = KEY_MAPPINGS if mappings is None else mappings

    def handle(self, event):
        """update the keypad with one event, return False when the user asked to quit"""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key in self.mappings:
                self.keypad.press(self.mappings[event.key])
        elif event.type == pygame.KEYUP and event.key in self.mappings:
            self.keypad.release(self.mappings[event.key])
        return True

    def poll(self):
        """loop through the event queue, return False when the emulation has to stop"""
        run = True
        for event in pygame.event.get():
            run = self.handle(event) and run
        return run


# ******************** AUDIO
def square_wave(frequency=TONE_HZ, sample_rate=SAMPLE_RATE, channels=1, volume=0.25):
    """one period of a signed 16 bits square wave, interleaved for the given channels count"""
    period = max(2, sample_rate // frequency)
    amplitude = int(32767 * volume)
    samples = array("h")
    for i in range(period):
        sample = amplitude if i < period // 2 else -amplitude
        samples.extend([sample] * channels)
    return samples


class Beeper:
    """plays a continuous tone while the sound timer is active"""
    def __init__(self, frequency=TONE_HZ, muted=False):
        self.sound = None
        self.playing = False
        if muted:
            return
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            sample_rate, _, channels = pygame.mixer.get_init()
            self.sound = pygame.mixer.Sound(buffer=square_wave(frequency, sample_rate, channels).tobytes())
        except pygame.error as err:
            logger.warning("audio disabled: %s", err)

    def start(self):
        if self.sound is not None and not self.playing:
            self.sound.play(loops=-1)
        self.playing = True

    def stop(self):
        if self.sound is not None and self.playing:
            self.sound.stop()
        self.playing = False
