# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60
MAX_DT = 0.05               # cap per-frame dt (s) to bound integration error

# --- Physics ---
GRAVITY = 3.5               # moon gravity (px/s^2)
THRUST_ACC = 8.0            # main engine acceleration (px/s^2)
ROTATION_SPEED = 2.0        # rad/s
FUEL_MAX = 150.0
FUEL_BURN_RATE = 3.0        # fuel units per second of thrust

# --- Lander ---
LANDER_START_X = 400.0
LANDER_START_Y = 100.0
LANDER_HALF_H = 20          # centre -> bottom contact distance
X_MIN = 5
X_MAX = 795
Y_CEILING = -30             # above this line the craft is lost
CEILING_EXPLOSION_Y = 10

# --- Terrain generation ---
TERRAIN_STEP = 10
TERRAIN_START_Y = 550.0
TERRAIN_MIN_Y = 480.0
TERRAIN_MAX_Y = 600.0
TERRAIN_JITTER = 25.0       # full range of the per-step height delta
FLAT_CHANCE = 0.25
MIN_FLAT_SPOTS = 2
FLAT_MIN_W = 40.0
FLAT_MAX_W = 60.0
FLAT_FORCE_MIN_X = 100      # forced flat spots only strictly inside (100, 700)
FLAT_FORCE_MAX_X = 700
FLAT_LAST_START_X = 700     # no flat spot may start at or after this x
FAILSAFE_FLAT_X = 350
FAILSAFE_FLAT_W = 50
FAILSAFE_FLAT_MIN_Y = 530.0
FAILSAFE_FLAT_RANGE = 40.0

# --- Landing ---
FLAT_CHECK_RANGE = 15
FLAT_TOLERANCE = 1.0
MAX_LANDING_ANGLE = 0.7     # ~40 deg
MAX_LANDING_VY = 3.5
MAX_LANDING_VX = 4.0

# --- Approach cue (visual only, stricter than landing) ---
APPROACH_DISTANCE = 50
APPROACH_MAX_VY = 2.5
APPROACH_MAX_ANGLE = 0.4

# --- Explosion particles ---
PARTICLE_COUNT = 30
PARTICLE_SPEED = 6.0        # velocity drawn from [-6, 6] px/frame
PARTICLE_MIN_SIZE = 2.0
PARTICLE_SIZE_RANGE = 5.0
PARTICLE_LIFE = 1.5
PARTICLE_DECAY = 2.0
PARTICLE_GRAVITY_SCALE = 0.5

# --- Stars ---
STAR_COUNT = 100
STAR_VX = -20.0             # px/s, drifts left

SEED_DEFAULT = None         # None -> new random terrain each launch

# --- Colors (RGB) ---
COLOR_BG = (0, 0, 0)
COLOR_FG = (255, 255, 255)
COLOR_STAR = (255, 255, 255)
COLOR_TERRAIN = (128, 128, 128)
COLOR_PAD = (0, 206, 209)
COLOR_LANDER = (192, 192, 192)
COLOR_LANDED = (0, 255, 0)
COLOR_DANGER = (255, 0, 0)
COLOR_FUEL_OK = (0, 128, 0)
COLOR_FUEL_LOW = (255, 255, 0)
COLOR_FUEL_EMPTY = (255, 0, 0)
COLOR_HINT = (180, 180, 180)
COLOR_BUTTON = (40, 60, 90)
COLOR_BUTTON_EDGE = (90, 130, 180)
