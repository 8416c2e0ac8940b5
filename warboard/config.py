"""
Single place for default game configuration.
Each default can be overridden with an environment variable when starting the console game.
"""

import os

# Setup id from data/setups/<id>.json (e.g. "classic", "duel"). Used when no setup is chosen.
DEFAULT_SETUP_ID = os.environ.get("WARBOARD_SETUP_ID", "classic")

# Combat rule for new games: "conquest" (attacker wins on a strictly higher roll and moves
# half its troops in) or "attrition" (attacker wins ties, defender loses one troop per win).
DEFAULT_COMBAT_RULE = os.environ.get("WARBOARD_COMBAT_RULE", "conquest")

# Color the human player fights under; missions are evaluated for this color.
DEFAULT_PLAYER_COLOR = os.environ.get("WARBOARD_PLAYER_COLOR", "Blue")
