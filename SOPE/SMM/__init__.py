# =============================================================================
# SOPE/SMM/__init__.py — Stream Map Module
# =============================================================================
#
# The SMM is the single source of truth for the .sol wire format: preamble
# layout, type-tag numbers and names, expandable-integer widths, and the
# default on-device store locations.
#
# All other SOPE sub-modules (SDM, SVM, SBM) import exclusively from here.
# Never define format constants outside this module.
#
# Sub-modules:
#   constants.py  — all layout constants and the type-tag map
# =============================================================================
