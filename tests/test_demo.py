"""
Tests for the demo script's argument handling.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import demo_groupsig


def test_members_must_be_positive(monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['demo_groupsig.py', '--members', '0'])
    with pytest.raises(SystemExit) as exc:
        demo_groupsig.parse_args()
    assert exc.value.code == 2


def test_defaults(monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['demo_groupsig.py', '--seed', '7'])
    args = demo_groupsig.parse_args()
    assert args.members == 3
    assert args.seed == 7
