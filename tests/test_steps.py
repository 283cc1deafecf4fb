"""
Test cases for the behave step definitions

Loads every module under features/steps into behave's step registry, the way
a behave run does, and checks each step in the feature files resolves.
"""

import glob
import os
import runpy
from unittest import TestCase

from behave.parser import parse_file
from behave.step_registry import registry

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
FEATURES_DIR = os.path.join(ROOT, "features")
STEP_MODULES = sorted(glob.glob(os.path.join(FEATURES_DIR, "steps", "*.py")))
FEATURE_FILES = sorted(glob.glob(os.path.join(FEATURES_DIR, "*.feature")))


def feature_steps(path):
    """(scenario name, step) for every step a feature file runs"""
    feature = parse_file(path)
    background = list(feature.background.steps) if feature.background else []
    for scenario in feature.walk_scenarios():
        for step in background + list(scenario.steps):
            yield scenario.name, step


######################################################################
#  S T E P   R E G I S T R Y
######################################################################
class TestStepDefinitions(TestCase):
    """Step modules load cleanly and cover the feature files"""

    @classmethod
    def setUpClass(cls):
        """Load the step modules into an empty registry"""
        cls.saved = {step_type: list(defs) for step_type, defs in registry.steps.items()}
        for defs in registry.steps.values():
            del defs[:]
        for path in STEP_MODULES:
            runpy.run_path(path)

    @classmethod
    def tearDownClass(cls):
        """Put back whatever the registry held before"""
        for step_type, defs in registry.steps.items():
            defs[:] = cls.saved.get(step_type, [])

    def test_modules_found(self):
        """It should find step modules and feature files"""
        self.assertTrue(STEP_MODULES)
        self.assertTrue(FEATURE_FILES)

    def test_regex_patterns_not_anchored(self):
        """It should register regex patterns without begin/end markers"""
        for defs in registry.steps.values():
            for step_definition in defs:
                pattern = step_definition.pattern
                self.assertFalse(pattern.startswith("^"), pattern)
                self.assertFalse(pattern.endswith("$"), pattern)

    def test_every_step_is_defined(self):
        """It should find a definition for every step in every feature"""
        undefined = []
        for path in FEATURE_FILES:
            for scenario_name, step in feature_steps(path):
                if registry.find_match(step) is None:
                    undefined.append(f"{os.path.basename(path)} / {scenario_name}: {step.keyword} {step.name}")
        self.assertEqual(undefined, [])

    def test_regex_step_binding(self):
        """It should bind a regex step to its definition"""
        for path in FEATURE_FILES:
            for _, step in feature_steps(path):
                if step.name.startswith("I go to page "):
                    match = registry.find_match(step)
                    self.assertEqual(match.func.__name__, "step_go_to_page")
                    return
        self.fail('No "I go to page" step in the feature files')
