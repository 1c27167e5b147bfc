from .errors import PetPadError, InputError, ReadError, DecodeError, PersistenceError
from .utils import glob, mkdir_p, round_half_up
from .color import rgb_to_hsv
from .sampler import RegionSampler
from .context import apply_context_factors, context_from_inputs, WEIGHTS
from .classify import (classify_by_hsv, classify_ph_by_hsv, diagnosis_text,
                       treatment_guide, LEVEL_LABELS)
from .history import HistoryStore, glucose_update, ph_update
from .aggregate import calendar, stats, series_frame
from .decoder import ImageDecoder
from .repository import Repository, JsonFileStore, MemoryStore, STORAGE_KEYS
from .monitor import PetPadMonitor, analyze_image
