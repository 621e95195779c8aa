import unittest

from helpers import FakeCompletionService, make_profile, make_job

from jobmatch.ai.models import SalaryPrediction, SuccessProbability
from jobmatch.exceptions import CompletionServiceError
from jobmatch.recommend import (
    SalaryPredictor, SalaryRangeParser, SuccessProbabilityEstimator, JobAlertGenerator
)


class SalaryRangeParserTests(unittest.TestCase):
    def setUp(self):
        self.parser = SalaryRangeParser()

    def test_annual_ranges(self):
        self.assertEqual(self.parser.parse("$90k - $140k"), (90, 140))
        self.assertEqual(self.parser.parse("90,000-140,000 per year"), (90, 140))
        self.assertEqual(self.parser.parse("120K"), (120, 120))
        self.assertEqual(self.parser.parse("$140k - $90k"), (90, 140))

    def test_hourly_and_monthly(self):
        self.assertEqual(self.parser.parse("$45/hour"), (94, 94))
        self.assertEqual(self.parser.parse("5,000 per month"), (60, 60))

    def test_unparsable(self):
        self.assertIsNone(self.parser.parse("Competitive"))
        self.assertIsNone(self.parser.parse(None))
        self.assertIsNone(self.parser.parse(""))

    def test_numeric_input(self):
        self.assertEqual(self.parser.parse(120000), (120, 120))
        self.assertEqual(self.parser.parse(95.5), (96, 96))


class SalaryPredictionModelTests(unittest.TestCase):
    def test_inverted_band_swapped_and_median_defaulted(self):
        prediction = SalaryPrediction.from_response(
            {"predictedMin": 100, "predictedMax": 80, "confidence": "75%"}
        )

        self.assertEqual(prediction.predicted_min, 80)
        self.assertEqual(prediction.predicted_max, 100)
        self.assertEqual(prediction.predicted_median, 90)
        self.assertEqual(prediction.confidence, 75)

    def test_median_clamped_into_band(self):
        prediction = SalaryPrediction.from_response(
            {"predictedMin": 90, "predictedMax": 140, "predictedMedian": 500}
        )
        self.assertEqual(prediction.predicted_median, 140)

    def test_negative_and_invalid_values(self):
        prediction = SalaryPrediction.from_response(
            {"predictedMin": -20, "predictedMax": "lots", "confidence": 180,
             "marketComparison": {"percentile": -5}},
            default_min=0,
            default_max=50,
        )

        self.assertEqual(prediction.predicted_min, 0)
        self.assertEqual(prediction.predicted_max, 50)
        self.assertEqual(prediction.confidence, 100)
        self.assertEqual(prediction.market_comparison.percentile, 0)
        self.assertEqual(prediction.market_comparison.industry_average, 25)


class SalaryPredictorTests(unittest.TestCase):
    def test_prediction(self):
        service = FakeCompletionService([{
            "predictedMin": 95,
            "predictedMedian": 115,
            "predictedMax": 135,
            "confidence": 80,
            "marketComparison": {"percentile": 60, "industryAverage": 110},
            "factors": ["AWS demand", "Seniority"],
        }])
        prediction = SalaryPredictor(service).predict(make_profile(), make_job(), user_id="u-1")

        self.assertEqual(prediction.to_dict(), {
            "predictedMin": 95,
            "predictedMedian": 115,
            "predictedMax": 135,
            "confidence": 80,
            "marketComparison": {"percentile": 60, "industryAverage": 110},
            "factors": ["AWS demand", "Seniority"],
        })
        self.assertEqual(service.requests[0].feature_name, "salary_prediction")
        self.assertEqual(service.requests[0].user_id, "u-1")
        self.assertEqual(service.timeouts[0], 45.0)

    def test_garbage_falls_back_to_advertised_band(self):
        service = FakeCompletionService(["no idea"])
        prediction = SalaryPredictor(service).predict(make_profile(), make_job())

        self.assertEqual(
            (prediction.predicted_min, prediction.predicted_median, prediction.predicted_max),
            (90, 115, 140)
        )
        self.assertEqual(prediction.confidence, 50)
        self.assertIsNone(prediction.market_comparison)

    def test_garbage_without_advertised_band(self):
        service = FakeCompletionService(["no idea"])
        prediction = SalaryPredictor(service).predict(make_profile(), make_job(salaryRange=None))

        self.assertEqual(prediction.predicted_min, 0)
        self.assertEqual(prediction.predicted_max, 0)

    def test_list_response_uses_first_object(self):
        service = FakeCompletionService(['[{"predictedMin": 100, "predictedMax": 120}]'])
        prediction = SalaryPredictor(service).predict(make_profile(), make_job())

        self.assertEqual(prediction.predicted_median, 110)

    def test_service_error_propagates(self):
        service = FakeCompletionService(error=CompletionServiceError("boom", error_type="server"))

        with self.assertRaises(CompletionServiceError):
            SalaryPredictor(service).predict(make_profile(), make_job())


class SuccessProbabilityTests(unittest.TestCase):
    def test_estimate(self):
        service = FakeCompletionService([{
            "overallProbability": 82,
            "breakdown": {"qualifications": 80, "skills": 120},
            "riskFactors": ["Short tenure"],
            "improvementSuggestions": ["Add metrics"],
        }])
        estimate = SuccessProbabilityEstimator(service).estimate(make_profile(), make_job())

        self.assertEqual(estimate.overall_probability, 82)
        self.assertEqual(estimate.breakdown.qualifications, 80)
        self.assertEqual(estimate.breakdown.skills, 100)
        self.assertEqual(estimate.breakdown.experience, 50)
        self.assertEqual(estimate.risk_factors, ["Short tenure"])
        self.assertEqual(estimate.level, "High")
        self.assertEqual(service.requests[0].feature_name, "success_probability")

    def test_wrapped_object(self):
        service = FakeCompletionService([{"successProbability": {"overallProbability": 35}}])
        estimate = SuccessProbabilityEstimator(service).estimate(make_profile(), make_job())

        self.assertEqual(estimate.overall_probability, 35)
        self.assertEqual(estimate.level, "Low")

    def test_garbage_is_neutral(self):
        service = FakeCompletionService(["```\nnot json\n```"])
        estimate = SuccessProbabilityEstimator(service).estimate(make_profile(), make_job())

        self.assertEqual(estimate, SuccessProbability())
        self.assertEqual(estimate.level, "Medium")


class JobAlertGeneratorTests(unittest.TestCase):
    def test_generate(self):
        service = FakeCompletionService([[
            {
                "criteria": {
                    "keywords": ["Python", "AWS"],
                    "location": "Remote",
                    "salaryMin": 100,
                    "salaryMax": None,
                    "industry": "null",
                    "experienceLevel": "senior",
                },
                "frequency": "Daily",
                "description": "Senior Python roles",
            },
            {"criteria": {"keywords": "Data Engineer"}, "frequency": "hourly"},
            {"frequency": "daily"},
        ]])
        alerts = JobAlertGenerator(service).generate(make_profile())

        self.assertEqual(len(alerts), 2)
        first, second = alerts
        self.assertTrue(first.id.startswith("alert-"))
        self.assertTrue(first.id.endswith("-0"))
        self.assertTrue(second.id.endswith("-1"))
        self.assertEqual(first.frequency, "daily")
        self.assertEqual(second.frequency, "weekly")
        self.assertEqual(first.criteria.salary_min, 100)
        self.assertIsNone(first.criteria.salary_max)
        self.assertIsNone(first.criteria.industry)
        self.assertEqual(second.criteria.keywords, ["Data Engineer"])
        self.assertTrue(first.active)

        data = first.to_dict()
        self.assertEqual(data["criteria"]["keywords"], ["Python", "AWS"])
        self.assertIn("lastChecked", data)
        self.assertEqual(service.requests[0].feature_name, "job_alerts")

    def test_profile_changes_in_prompt(self):
        service = FakeCompletionService([[]])
        previous = make_profile(skills=["Python"], yearsOfExperience=3)
        JobAlertGenerator(service).generate(make_profile(skills=["Python", "Go"]), previous)

        prompt = service.requests[0].prompt
        self.assertIn("New skills: Go", prompt)
        self.assertIn("Experience increased from 3", prompt)

    def test_new_profile_prompt(self):
        service = FakeCompletionService([[]])
        JobAlertGenerator(service).generate(make_profile())

        self.assertIn("This is a new profile.", service.requests[0].prompt)

    def test_garbage_gives_no_alerts(self):
        service = FakeCompletionService(["no alerts today"])
        self.assertEqual(JobAlertGenerator(service).generate(make_profile()), [])


if __name__ == "__main__":
    unittest.main()
