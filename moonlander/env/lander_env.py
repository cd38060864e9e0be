# moonlander/env/lander_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from moonlander.game.config import WIDTH, HEIGHT, FPS
from moonlander.game.landing import LandingState
from moonlander.game.sim import SimState, new_sim, step_sim
from moonlander.game.render import draw_frame, load_fonts
from moonlander.env.observations import OBS_LOW, OBS_HIGH, build_observation

NOOP, THRUST, ROTATE_LEFT, ROTATE_RIGHT = range(4)

LANDED_REWARD = 100.0
CRASH_REWARD = -100.0
FUEL_PENALTY = 0.03     # per sub-step with the engine burning


class LanderEnv(gym.Env):
    """
    Moon lander Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), fixed dt so rollouts are reproducible.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (10,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = THRUST, 2 = ROTATE_LEFT, 3 = ROTATE_RIGHT
        self.action_space = gym.spaces.Discrete(4)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.sim: Optional[SimState] = None
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.clock = None
        self.fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed pins the terrain; None lets new_sim pick one.
        terrain_seed = int(seed) if seed is not None else None
        self.sim = new_sim(terrain_seed)
        self.timestep = 0

        obs = build_observation(self.sim)
        info = self._info()
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"
        sim = self.sim
        lander = sim.lander

        lander.thrusting = action == THRUST
        lander.rotating_left = action == ROTATE_LEFT
        lander.rotating_right = action == ROTATE_RIGHT

        reward = 0.0
        for _ in range(self.frame_skip):
            if lander.engine_on:
                reward -= FUEL_PENALTY
            step_sim(sim, self.dt)
            if sim.game_over:
                break

        if sim.state is LandingState.LANDED:
            reward += LANDED_REWARD
        elif sim.state is LandingState.CRASHED:
            reward += CRASH_REWARD

        self.timestep += 1
        terminated = sim.game_over
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = build_observation(sim)
        info = self._info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _info(self) -> Dict[str, Any]:
        assert self.sim is not None
        report = self.sim.last_report
        return {
            "seed": self.sim.seed,
            "timestep": self.timestep,
            "outcome": self.sim.state.value,
            "fuel": self.sim.lander.fuel,
            "crash_reasons": report.reasons() if report is not None else [],
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Moon Lander — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.fonts = load_fonts()

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_frame(self.screen, self.sim, self.fonts)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.fonts = None
