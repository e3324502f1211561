import math
import unittest

from division_risk_navigator.models import (
    ElectoralDivision,
    InvalidFactorError,
    RiskAssessment,
    RiskFactors,
    RiskLevel,
    ScenarioModifiers,
    classify_risk,
    round_half_up,
    to_division,
    to_risk_assessment,
    to_risk_factors,
    to_scenario_modifiers,
)


class ClassifyRiskTests(unittest.TestCase):
    def test_boundaries_are_half_open(self):
        self.assertIs(classify_risk(0), RiskLevel.LOW)
        self.assertIs(classify_risk(24), RiskLevel.LOW)
        self.assertIs(classify_risk(25), RiskLevel.MEDIUM)
        self.assertIs(classify_risk(49), RiskLevel.MEDIUM)
        self.assertIs(classify_risk(50), RiskLevel.HIGH)
        self.assertIs(classify_risk(74), RiskLevel.HIGH)
        self.assertIs(classify_risk(75), RiskLevel.VERY_HIGH)
        self.assertIs(classify_risk(100), RiskLevel.VERY_HIGH)

    def test_out_of_range_still_classifies(self):
        self.assertIs(classify_risk(-5), RiskLevel.LOW)
        self.assertIs(classify_risk(140), RiskLevel.VERY_HIGH)

    def test_levels_are_ordered_and_labelled(self):
        ranks = [level.rank for level in (RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.VERY_HIGH)]
        self.assertEqual(ranks, [0, 1, 2, 3])
        self.assertEqual(RiskLevel.VERY_HIGH.value, "very-high")
        self.assertEqual(RiskLevel.VERY_HIGH.label, "Very High")
        self.assertEqual(RiskLevel.LOW.label, "Low")


class PayloadNormalisationTests(unittest.TestCase):
    def test_camel_case_keys_are_accepted(self):
        factors = to_risk_factors(
            {
                "dependencyRatio": 35,
                "hospitalStress": 58,
                "isolationScore": 22,
                "walkability": 75,
                "environmentalScore": 45,
            }
        )
        self.assertEqual(factors.as_dict()["hospital_stress"], 58)
        self.assertEqual(factors.environmental_score, 45)

    def test_missing_environmental_score_defaults_to_midpoint(self):
        factors = to_risk_factors(
            {"dependency_ratio": 10, "hospital_stress": 20, "isolation_score": 30, "walkability": 40}
        )
        self.assertEqual(factors.environmental_score, 50)

    def test_zero_environmental_score_is_kept(self):
        factors = to_risk_factors(
            {
                "dependency_ratio": 10,
                "hospital_stress": 20,
                "isolation_score": 30,
                "walkability": 40,
                "environmental_score": 0,
            }
        )
        self.assertEqual(factors.environmental_score, 0)

    def test_missing_required_factor_is_rejected(self):
        with self.assertRaises(InvalidFactorError):
            to_risk_factors({"dependency_ratio": 10, "hospital_stress": 20, "walkability": 40})

    def test_out_of_range_values_are_clamped_and_rounded(self):
        factors = to_risk_factors(
            {
                "dependency_ratio": 140,
                "hospital_stress": -12,
                "isolation_score": 22.5,
                "walkability": 75.4,
                "environmental_score": 45,
            }
        )
        self.assertEqual(factors.dependency_ratio, 100)
        self.assertEqual(factors.hospital_stress, 0)
        self.assertEqual(factors.isolation_score, 23)
        self.assertEqual(factors.walkability, 75)

    def test_non_numeric_values_are_rejected(self):
        base = {"dependency_ratio": 10, "hospital_stress": 20, "isolation_score": 30, "walkability": 40}
        for bad in ("high", math.nan, math.inf, True, [1]):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidFactorError):
                    to_risk_factors({**base, "hospital_stress": bad})

    def test_same_factor_under_two_spellings_is_rejected(self):
        with self.assertRaises(InvalidFactorError):
            to_risk_factors(
                {
                    "dependency_ratio": 10,
                    "hospitalStress": 20,
                    "hospital_stress": 90,
                    "isolation_score": 30,
                    "walkability": 40,
                }
            )

    def test_invalid_factor_error_is_a_value_error(self):
        self.assertTrue(issubclass(InvalidFactorError, ValueError))

    def test_stored_assessment_keeps_authored_overall(self):
        assessment = to_risk_assessment(
            {
                "overall": 42,
                "factors": {
                    "dependency_ratio": 35,
                    "hospital_stress": 58,
                    "isolation_score": 22,
                    "walkability": 75,
                    "environmental_score": 45,
                },
            }
        )
        self.assertEqual(assessment.overall, 42)
        self.assertIs(assessment.risk_level, RiskLevel.MEDIUM)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(69.6), 70)
        self.assertEqual(round_half_up(43.4), 43)


class DirectConstructionTests(unittest.TestCase):
    def test_risk_factors_clamp_and_round_on_construction(self):
        factors = RiskFactors(
            dependency_ratio=200,
            hospital_stress=-5,
            isolation_score=22.5,
            walkability=100,
            environmental_score=0,
        )
        self.assertEqual(factors.as_dict(), to_risk_factors(factors.as_dict()).as_dict())
        self.assertEqual(factors.dependency_ratio, 100)
        self.assertEqual(factors.hospital_stress, 0)
        self.assertEqual(factors.isolation_score, 23)

    def test_risk_factors_reject_non_finite_values(self):
        for bad in (math.nan, math.inf, True, "high"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidFactorError):
                    RiskFactors(dependency_ratio=bad, hospital_stress=0, isolation_score=0, walkability=0)

    def test_assessment_overall_is_clamped(self):
        factors = RiskFactors(dependency_ratio=0, hospital_stress=0, isolation_score=0, walkability=100)
        self.assertEqual(RiskAssessment(overall=130, factors=factors).overall, 100)
        self.assertEqual(RiskAssessment(overall=-4, factors=factors).overall, 0)

    def test_modifiers_reject_non_finite_changes(self):
        for bad in (math.inf, -math.inf, math.nan, False):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidFactorError):
                    ScenarioModifiers(dependency_ratio_change=bad)


class ScenarioModifierPayloadTests(unittest.TestCase):
    def test_defaults_are_neutral(self):
        self.assertTrue(ScenarioModifiers().is_neutral())
        self.assertTrue(to_scenario_modifiers({}).is_neutral())

    def test_key_spellings(self):
        modifiers = to_scenario_modifiers(
            {"hospitalStressChange": 20, "walkability_change": -10, "isolation_score": 5}
        )
        self.assertEqual(modifiers.hospital_stress_change, 20.0)
        self.assertEqual(modifiers.walkability_change, -10.0)
        self.assertEqual(modifiers.isolation_score_change, 5.0)
        self.assertEqual(modifiers.dependency_ratio_change, 0.0)
        self.assertFalse(modifiers.is_neutral())

    def test_unknown_modifier_is_rejected(self):
        with self.assertRaises(InvalidFactorError):
            to_scenario_modifiers({"crime_rate_change": 10})

    def test_same_modifier_under_two_spellings_is_rejected(self):
        with self.assertRaises(InvalidFactorError):
            to_scenario_modifiers({"hospitalStressChange": 20, "hospital_stress_change": -20})
        with self.assertRaises(InvalidFactorError):
            to_scenario_modifiers({"walkability": 5, "walkability_change": 5})

    def test_nan_modifier_is_rejected(self):
        with self.assertRaises(InvalidFactorError):
            to_scenario_modifiers({"hospital_stress_change": math.nan})


class DivisionPayloadTests(unittest.TestCase):
    def _payload(self, **overrides):
        factors = {
            "dependencyRatio": 30,
            "hospitalStress": 48,
            "isolationScore": 20,
            "walkability": 65,
        }
        payload = {
            "id": "dublin-north",
            "name": "Dublin North",
            "county": "Dublin",
            "population": 118000,
            "coordinates": [53.4017, -6.3178],
            "currentRisk": {"overall": 35, "factors": factors},
            "futureRisk": {"overall": 45, "factors": factors},
        }
        payload.update(overrides)
        return payload

    def test_original_record_shape_loads(self):
        division = to_division(self._payload())
        self.assertIsInstance(division, ElectoralDivision)
        self.assertEqual(division.coordinates, (53.4017, -6.3178))
        self.assertEqual(division.current_risk.overall, 35)
        self.assertEqual(division.current_risk.factors.environmental_score, 50)

    def test_missing_id_is_rejected(self):
        with self.assertRaises(ValueError):
            to_division(self._payload(id=""))

    def test_bad_coordinates_are_rejected(self):
        with self.assertRaises(ValueError):
            to_division(self._payload(coordinates=[53.4]))

    def test_missing_future_risk_is_rejected(self):
        payload = self._payload()
        del payload["futureRisk"]
        with self.assertRaises(ValueError):
            to_division(payload)
