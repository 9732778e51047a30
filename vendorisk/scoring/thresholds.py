# Risk level bands. Closed intervals on whole-number scores.
# Externalized here so they can be tuned without changing classifier logic.

LOW_RISK_MIN = 0
LOW_RISK_MAX = 30
MEDIUM_RISK_MIN = 31
MEDIUM_RISK_MAX = 60
HIGH_RISK_MIN = 61
HIGH_RISK_MAX = 80
CRITICAL_RISK_MIN = 81
CRITICAL_RISK_MAX = 100

# Interpretation:
# 0  - 30  -> LOW
# 31 - 60  -> MEDIUM
# 61 - 80  -> HIGH
# 81 - 100 -> CRITICAL
# anything else (negative, >100, between bands) -> UNKNOWN
