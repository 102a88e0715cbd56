import argparse
import logging
import sys

from .constants import DEBUG, DEFAULT_SPEED, SCALE, TIMER_HZ
from .cpu import Chip8
from .drivers import Beeper, Keyboard, Screen, pygame
from .errors import FatalMachineFault, ProgramCounterOutOfRange, ResourceFault

logger = logging.getLogger(__name__)


# ******************** ENTRY POINT SECTION
def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("-s", "--speed", type=int, default=DEFAULT_SPEED, help="instructions executed per second")
    parser.add_argument("--scale", type=int, default=SCALE, help="size in screen pixels of a CHIP-8 pixel")
    parser.add_argument("--mute", action="store_true", help="disable the sound")
    return parser, parser.parse_args(argv)


def read_rom(path):
    with open(path, mode='rb') as f:
        return f.read()


def setup_logging():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )


def main(argv=None):
    parser, args = get_args(argv)
    setup_logging()
    try:
        rom = read_rom(args.file)
    except OSError as err:
        parser.error(f"cannot read {args.file}: {err.strerror}")
    # pygame initialization
    pygame.init()
    pygame.display.set_caption(args.file.replace("\\", "/").split('/')[-1])
    clock = pygame.time.Clock()
    # IO
    screen = Screen(s=args.scale)
    beeper = Beeper(muted=args.mute)
    # CPU
    chip = Chip8(on_sound_start=beeper.start, on_sound_stop=beeper.stop)
    keyboard = Keyboard(chip.keypad)
    try:
        chip.load_rom(rom)
    except ResourceFault as err:
        pygame.quit()
        sys.exit(f"{args.file}: {err}")
    cycles_per_frame = max(1, args.speed // TIMER_HZ)
    # emulation loop, one iteration is one 60Hz frame
    run = True
    try:
        while run:
            clock.tick(TIMER_HZ)
            run = keyboard.poll()
            chip.frame(cycles_per_frame)
            if chip.display.dirty:
                screen.render(chip.display)
    except ProgramCounterOutOfRange as end:
        # running off the program area ends the program, it is not a crash
        logger.info("program ended at 0x%04x", end.pc)
    except FatalMachineFault:
        sys.exit(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{chip}")
    finally:
        beeper.stop()
        pygame.quit()
    return 0
