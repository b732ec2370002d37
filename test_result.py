from utils.result import Result


class TestResult:
    """
    Tests for the Result success/failure container.
    """

    def test_ok(self):
        result = Result.ok([1, 2])

        assert result.is_success()
        assert not result.is_failure()
        assert result.data == [1, 2]
        assert str(result) == "Success: [1, 2]"

    def test_fail(self):
        result = Result.fail("No data rows provided", "EMPTY_INPUT")

        assert result.is_failure()
        assert (result.error, result.code, result.details) == ("No data rows provided", "EMPTY_INPUT", None)
        assert str(result) == "Failure (EMPTY_INPUT): No data rows provided"

    def test_fail_with_details(self):
        result = Result.fail("Validation error", "VALIDATION_ERROR", details=["x"])
        assert result.details == ["x"]

    def test_on_failure_runs_only_for_failures(self):
        seen = []

        ok = Result.ok(1).on_failure(lambda e, c: seen.append(c))
        failed = Result.fail("bad", "BAD").on_failure(lambda e, c: seen.append((e, c)))

        assert seen == [("bad", "BAD")]
        assert ok.data == 1
        assert failed.code == "BAD"

    def test_str_truncates_long_data(self):
        assert str(Result.ok("x" * 200)).endswith("...")
