# moonlander/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_UP, K_LEFT, K_RIGHT, K_ESCAPE, K_r
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .render import draw_frame, load_fonts, restart_button_rect
from .sim import new_sim, step_sim


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Moon lander: set the craft down gently on a flat spot.")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Terrain seed. Omit for a new random terrain on every (re)start.")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Console log verbosity.")
    return p.parse_args(argv)


def apply_controls(sim, pressed):
    """Map held keys onto the lander's control flags (ignored once the run is over)."""
    if sim.game_over:
        return
    sim.lander.thrusting = bool(pressed[K_UP])
    sim.lander.rotating_left = bool(pressed[K_LEFT])
    sim.lander.rotating_right = bool(pressed[K_RIGHT])


def wants_restart(event, sim, restart_rect):
    """R or a left click on the restart button, only after the run is over."""
    if not sim.game_over:
        return False
    if event.type == pygame.KEYDOWN:
        return event.key == K_r
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return bool(restart_rect.collidepoint(event.pos))
    return False


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[%(asctime)s] %(levelname)s %(message)s")

    pygame.init()
    pygame.display.set_caption("Moon Lander")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    fonts = load_fonts()

    # a pinned --seed replays the same terrain on restart
    sim = new_sim(args.seed)
    restart_rect = restart_button_rect()

    while True:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
            if wants_restart(event, sim, restart_rect):
                sim = new_sim(args.seed)

        apply_controls(sim, pygame.key.get_pressed())
        step_sim(sim, dt)

        draw_frame(screen, sim, fonts)
        pygame.display.flip()


if __name__ == "__main__":
    run()
