# Lighthouse simulation core - deterministic single-beam round engine
from .config import DEFAULT_CONFIG, LighthouseConfig
from .controller import RoundController, RoundPhase
from .contracts import FrameSnapshot, GameOver, RoundEvent
from .entities import Beam, Boat, Obstacle, Side
from .geometry import is_in_sector, normalize_angle
