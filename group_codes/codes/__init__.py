from .allocator import CodeAllocator, get_code_allocator, get_code_registry
from .charset import ALPHABET
from .formatter import describe, detect_kind, generate, normalize
from .kind_config import (
    DEFAULT_KIND_CONFIGS,
    KindConfigError,
    KindConfigTable,
    get_kind_config_table,
)
from .registry import (
    AvailabilityChecker,
    CodeAlreadyClaimedError,
    InMemoryCodeRegistry,
)
from .router import router
from .validator import CodeValidator
