"""Shared fixtures."""

import os

# No log files during tests; must be set before ppt_game is imported
os.environ.setdefault("LOG_DIR", "")

import pytest

from ppt_game.config.game_settings import parse_puzzle_data


def make_raw_puzzle(prefix=""):
    return {
        "rows": [
            {
                "constraint": f"{prefix}Starts with B",
                "cells": [
                    {"category": "people", "clue": "Composer", "clue2": "Deaf", "answer": "Beethoven",
                     "acceptableAnswers": ["Ludwig van Beethoven"]},
                    {"category": "places", "clue": "German capital", "clue2": "Wall", "answer": "Berlin"},
                    {"category": "things", "clue": "Two wheels", "clue2": "Pedals", "answer": "Bicycle",
                     "acceptableAnswers": ["Bike"]},
                ],
            },
            {
                "constraint": f"{prefix}London",
                "cells": [
                    {"category": "people", "clue": "Detective", "clue2": "Baker Street", "answer": "Sherlock Holmes"},
                    {"category": "places", "clue": "Clock tower", "clue2": "Westminster", "answer": "Big Ben"},
                    {"category": "things", "clue": "Red vehicles", "clue2": "Two decks", "answer": "Buses"},
                ],
            },
            {
                "constraint": f"{prefix}Kitchen",
                "cells": [
                    {"category": "people", "clue": "Chef", "clue2": "Hell's Kitchen", "answer": "Gordon Ramsay"},
                    {"category": "places", "clue": "Cooking room", "clue2": "Heart of the home", "answer": "Kitchen"},
                    {"category": "things", "clue": "Sharp utensils", "clue2": "Block", "answer": "Knives"},
                ],
            },
        ]
    }


# Answers in row-major order, matching make_raw_puzzle
ANSWERS = [
    ["Beethoven", "Berlin", "Bicycle"],
    ["Sherlock Holmes", "Big Ben", "Buses"],
    ["Gordon Ramsay", "Kitchen", "Knives"],
]


@pytest.fixture
def raw_content():
    return {"startDate": "2020-01-01", "puzzles": [make_raw_puzzle()]}


@pytest.fixture
def puzzle_data(raw_content):
    return parse_puzzle_data(raw_content)


@pytest.fixture
def puzzle(puzzle_data):
    return puzzle_data.puzzles[0]


@pytest.fixture
def answers():
    return ANSWERS
