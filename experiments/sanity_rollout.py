# /experiments/sanity_rollout.py
"""
Sanity rollouts for LanderEnv:
- Runs RANDOM and/or AUTOPILOT policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Saves per-episode action sequences (and optionally observations) for inspection

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=4, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only the autopilot, custom seeds, also save observations:
  python -m experiments.sanity_rollout --policies autopilot --seeds 111,222,333 --save-traces --save-obs
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np

from moonlander.env.lander_env import LanderEnv, NOOP, THRUST, ROTATE_LEFT, ROTATE_RIGHT

POLICIES = ("random", "autopilot")


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.randint(0, 4))
    return act

def autopilot_policy_init():
    """
    Small rule set on the observation vector:
      - level the craft first (sin(angle) near 0),
      - then brake whenever the sink rate is above a target that shrinks
        with altitude, or when drifting sideways too fast.
    """
    def act(obs: np.ndarray) -> int:
        vx, vy = obs[2] * 10.0, obs[3] * 10.0
        sin_a = obs[4]
        altitude = obs[7] * 600.0
        if sin_a > 0.05:
            return ROTATE_LEFT
        if sin_a < -0.05:
            return ROTATE_RIGHT
        target_vy = 1.0 if altitude < 80.0 else 2.5
        if vy > target_vy or abs(vx) > 3.0:
            return THRUST
        return NOOP
    return act

def make_policy(policy_name: str, seed: int):
    if policy_name == "random":
        return random_policy_init(10_000 + seed)
    if policy_name == "autopilot":
        return autopilot_policy_init()
    raise ValueError(f"Unknown policy {policy_name!r}")


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    save_obs: bool,
                    out_dir: Path) -> Tuple[int, float, str, float, bool, bool]:
    """
    Returns: (ep_len, ret_sum, outcome, fuel_left, terminated, truncated)
    Also writes traces to disk if requested.
    """
    env = LanderEnv(frame_skip=frame_skip)
    policy = make_policy(policy_name, seed)

    actions: List[int] = []
    obs_list: List[np.ndarray] = []

    ret_sum = 0.0
    ep_len = 0
    term = trunc = False

    try:
        obs, info = env.reset(seed=seed)
        if save_obs:
            obs_list.append(obs.copy())

        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))

            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1

            if save_obs:
                obs_list.append(obs.copy())

            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        if save_obs:
            np.save(trace_dir / f"{seed}_obs.npy", np.asarray(obs_list, dtype=np.float32))

    return ep_len, ret_sum, str(info["outcome"]), float(info["fuel"]), bool(term), bool(trunc)


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "autopilot", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim frames per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save action sequences (and optional obs)")
    ap.add_argument("--save-obs", action="store_true",
                    help="Also save observations per step (larger files)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="[%(asctime)s] %(levelname)s %(message)s")

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "outcome", "fuel_left",
        "terminated", "truncated",
    ]

    to_run = list(POLICIES) if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        landed = 0
        for seed in seeds:
            ep_len, ret_sum, outcome, fuel, terminated, truncated = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                save_obs=args.save_obs,
                out_dir=out_dir
            )
            landed += int(outcome == "landed")
            write_episode_row(episodes_csv, header, [
                policy_name, seed, args.frame_skip,
                ep_len, f"{ret_sum:.1f}", outcome, f"{fuel:.1f}",
                int(terminated), int(truncated),
            ])
            print(f"[{policy_name}] seed={seed}  len={ep_len}  ret={ret_sum:.1f}  "
                  f"outcome={outcome}  fuel={fuel:.1f}")
        print(f"[{policy_name}] landed {landed}/{len(seeds)}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
