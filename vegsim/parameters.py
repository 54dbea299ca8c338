"""Default simulation parameters."""

import math

from vegsim.treeparameter import DistributionMode, SpaceDividingMode
from vegsim.vector import Vec3

SEED = 50365756705  # seed used for everything random

RESOURCE_DISTRIBUTION_MODE = DistributionMode.BORCHERT_HONDA
BORCHERT_HONDA_LAMBDA = 0.52  # auxiliary/terminal split ratio in the BH model
BORCHERT_HONDA_ALPHA = 2.0  # light to resources conversion

POLE_LENGTH = 1.0  # length of the vertical support pole, in metres
METAMER_BASE_LENGTH = 0.3  # scaled by resources per growth iteration

AUX_SHOOT_REQUIREMENT = 1.8  # resources an auxiliary bud needs for a metamer
TERM_SHOOT_REQUIREMENT = 1.0  # resources a terminal bud needs for a metamer

BUD_PERCEPTION_ANGLE = math.pi / 2.0
BUD_PERCEPTION_RADIUS_FACTOR = 1.1
OCCUPANCY_RADIUS_FACTOR = 1.0

AXILLARY_PERTURBATION_ANGLE = math.pi / 38.0
OPTIMAL_GROWTH_DIRECTION_WEIGHT = 0.2
SHED_TRESHHOLD = 0.01  # minimum resources before a branch is shed

TROPISM_START_WEIGTH = 0.1
TROPISM_DIR = Vec3(0.0, -0.0, 0.0)
TROPISM_CHANGE_RATE = 1.01

BOUNDING_BOX_SIDE = 50.0

SPACE_DIV_MODE = SpaceDividingMode.SHADOW_VOXELS
SPACE_DIV_RESOLUTION = 100  # voxels/markers per bounding box side

SHADOW_VOXEL_A = 0.1
SHADOW_VOXEL_B = 1.5
SHADOW_VOXEL_C = 1.0
SHADOW_VOXEL_MAX_SHADOW = 5.0
SHADOW_VOXEL_PIRAMID_LAYERS = 5

WIDTH_GROW_EXPONENT = 1.9
WIDTH_MIN_VALUE = 1.0e-8

BUD_RECOVERY_SPEED = 0.0  # 0 means a pruned bud never recovers