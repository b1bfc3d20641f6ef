"""
Single place for default game/setup configuration.
Change DEFAULT_SETUP_ID to switch which setup is loaded when none is given.
"""
import os

# Setup id from data/setups/<id>/ (e.g. "demo"). This is the default for new games.
DEFAULT_SETUP_ID = "demo"

# Fixed dice seed for reproducible runs; unset means the roller seeds from OS entropy.
_raw_seed = os.environ.get("WAR_DICE_SEED")
DICE_SEED = int(_raw_seed) if _raw_seed else None
