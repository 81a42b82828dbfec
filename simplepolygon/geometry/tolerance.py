from __future__ import annotations

# Positional epsilon for near-zero distance/length checks, relative to segment scale.
EPS_POS = 1e-12

# Relative epsilon below which two segment directions are treated as parallel.
EPS_PARALLEL = 1e-12
