#!/usr/bin/env python3

"""
Yum Repository Localizer

Rewrites yum/dnf .repo files so that every repository points at a locally
mirrored copy in object storage, and prints the sync command needed to
populate that mirror.
"""

__version__ = "0.3.0"
__author__ = "Repo Localizer Project"
