# =============================================================================
# SOPE/SVM/__init__.py — Stream Verification Module
# =============================================================================
#
# The SVM contains the tools for looking inside .sol files and for checking
# that the decoder still behaves the way the format demands.
#
# Sub-modules:
#   sol_inspector.py — decode one file and print a sectioned report (CLI)
#   validate.py      — self-validation suite for the SMM/SDM stack
# =============================================================================
