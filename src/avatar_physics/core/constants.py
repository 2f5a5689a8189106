"""Physical constants and default values for the physics engine."""

# Engine defaults
DEFAULT_GRAVITY = 9.8  # m/s^2
DEFAULT_DAMPING = 0.95  # velocity multiplier per step
DEFAULT_STIFFNESS = 0.15
DEFAULT_TIME_STEP = 1.0 / 60.0  # 60 FPS

# Largest frame delta handed to the engine by the frame clock (seconds)
MAX_FRAME_DELTA = 0.1

# Mass points
MASS_SCALE = 10.0  # vertex weight -> simulated mass
FIXED_VERTEX_TYPE = "joint"
FIXED_GROUP_TAG = "head"

# Springs
DEFAULT_MUSCLE_TENSION = 0.3
SPRING_DAMPING = 0.1  # stored per spring, not used by the force model

# Ground plane
GROUND_Y = -50.0
GROUND_RESTITUTION = 0.7
GROUND_FRICTION = 0.9

# Distance constraint relaxation
CONSTRAINT_ITERATIONS = 3
JOINT_CONSTRAINT_STIFFNESS = 0.9

# Anatomical distance table: (id1, id2, target distance)
JOINT_DISTANCE_TABLE = (
    # Head
    ("head_top", "neck_top_center", 15.0),
    ("head_chin", "neck_top_front", 8.0),
    # Shoulders
    ("shoulder_left_top", "clavicle_left", 12.0),
    ("shoulder_right_top", "clavicle_right", 12.0),
    # Hips
    ("hip_left", "waist_left", 10.0),
    ("hip_right", "waist_right", 10.0),
    # Spine
    ("neck_base_center", "spine_center", 30.0),
    ("spine_center", "waist_center_front", 15.0),
)
