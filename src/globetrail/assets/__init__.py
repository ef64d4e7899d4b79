# SPDX-License-Identifier: Apache-2.0
"""Bundled data files (country to region mapping)."""
