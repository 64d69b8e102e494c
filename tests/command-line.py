import logging
import pytest
from click.testing import CliRunner
from requestgate.cli import cli
from requestgate.json import as_json, load_json, load_ndjson


@pytest.fixture
def requests_file(tmp_path, request_json, cmo_sample, non_cmo_sample):
    """
    A newline-delimited file of one fully valid, one partially valid, one
    invalid, one id-less, and one non-CMO request, plus a blank line.
    """
    lines = [
        request_json([cmo_sample()], request_id = "1000_A"),
        request_json([cmo_sample(), cmo_sample(baitSet = "")], request_id = "2000_B"),
        request_json([{"igoId": "3000_C_1"}], request_id = "3000_C"),
        request_json([cmo_sample()], request_id = None),
        "",
        request_json([non_cmo_sample()], request_id = "4000_D", is_cmo = False),
    ]

    path = tmp_path / "requests.ndjson"
    path.write_text("\n".join(lines) + "\n", encoding = "utf-8")
    return path


def filtered_request_ids(output):
    return [load_json(line)["requestId"] for line in output.splitlines()]


def test_filter(monkeypatch, requests_file):
    monkeypatch.delenv("REQUESTGATE_CMO_REQUEST_FILTER", raising = False)

    result = CliRunner().invoke(cli, ["filter", str(requests_file)])

    assert result.exit_code == 0, result.output
    assert filtered_request_ids(result.stdout) == ["1000_A", "2000_B", "4000_D"]
    assert len(load_json(result.stdout.splitlines()[1])["samples"]) == 1


def test_filter_with_cmo_request_filter(requests_file):
    result = CliRunner().invoke(cli, ["filter", "--cmo-request-filter", str(requests_file)])

    assert result.exit_code == 0, result.output
    assert filtered_request_ids(result.stdout) == ["1000_A", "2000_B"]


def test_filter_with_cmo_request_filter_from_environ(monkeypatch, requests_file):
    monkeypatch.setenv("REQUESTGATE_CMO_REQUEST_FILTER", "true")

    enabled = CliRunner().invoke(cli, ["filter", str(requests_file)])
    overridden = CliRunner().invoke(cli, ["filter", "--no-cmo-request-filter", str(requests_file)])

    assert filtered_request_ids(enabled.stdout) == ["1000_A", "2000_B"]
    assert filtered_request_ids(overridden.stdout) == ["1000_A", "2000_B", "4000_D"]


def test_filter_with_status_log(tmp_path, requests_file):
    status_log = tmp_path / "request-status.ndjson"

    result = CliRunner().invoke(cli, ["filter", "--status-log", str(status_log), str(requests_file)])

    assert result.exit_code == 0, result.output

    with status_log.open(encoding = "utf-8") as file:
        records = list(load_ndjson(file))

    assert [record["status"] for record in records] == [
        "CMO_REQUEST_MISSING_REQ_FIELDS",
        "CMO_REQUEST_FAILED_SANITY_CHECK",
        "CMO_REQUEST_MISSING_REQ_FIELDS",
    ]
    assert [load_json(record["request"]).get("requestId") for record in records] == ["2000_B", "3000_C", None]


def test_filter_reads_stdin(request_json, cmo_sample):
    line = request_json([cmo_sample()])

    result = CliRunner().invoke(cli, ["filter", "-"], input = line + "\n")

    assert result.exit_code == 0, result.output
    assert result.stdout == line + "\n"


def test_filter_skips_blank_lines_in_summary(monkeypatch, caplog, requests_file):
    monkeypatch.delenv("REQUESTGATE_CMO_REQUEST_FILTER", raising = False)

    with caplog.at_level(logging.INFO, logger = "requestgate.cli.command.filter_requests"):
        result = CliRunner().invoke(cli, ["filter", str(requests_file)])

    assert result.exit_code == 0, result.output

    [summary] = [
        record.getMessage()
            for record in caplog.records
             if record.name == "requestgate.cli.command.filter_requests"]

    assert summary == (
        "Filtered 5 requests: 2 accepted, 1 accepted with missing samples, 2 rejected or skipped")


def test_filter_of_only_blank_lines(tmp_path):
    path = tmp_path / "requests.ndjson"
    path.write_text("\n  \n\t\n", encoding = "utf-8")

    result = CliRunner().invoke(cli, ["filter", str(path)])

    assert result.exit_code == 0, result.output
    assert result.stdout == ""


def test_filter_aborts_on_malformed_request(tmp_path):
    path = tmp_path / "requests.ndjson"
    path.write_text(as_json({"requestId": "1456_T", "samples": "1456_T_1"}) + "\n", encoding = "utf-8")

    result = CliRunner().invoke(cli, ["filter", str(path)])

    assert result.exit_code != 0
    assert result.stdout == ""


def test_check(monkeypatch, requests_file):
    monkeypatch.delenv("REQUESTGATE_CMO_REQUEST_FILTER", raising = False)

    result = CliRunner().invoke(cli, ["check", str(requests_file)])

    assert result.exit_code == 0, result.output
    assert [load_json(line) for line in result.stdout.splitlines()] == [
        {"requestId": "1000_A", "valid": True},
        {"requestId": "2000_B", "valid": True},
        {"requestId": "3000_C", "valid": True},
        {"requestId": None,     "valid": False},
        {"requestId": "4000_D", "valid": True},
    ]


def test_check_with_cmo_request_filter(requests_file):
    result = CliRunner().invoke(cli, ["check", "--cmo-request-filter", str(requests_file)])

    assert result.exit_code == 0, result.output
    assert load_json(result.stdout.splitlines()[-1]) == {"requestId": "4000_D", "valid": False}


def test_check_output_is_one_record_per_line(requests_file):
    result = CliRunner().invoke(cli, ["check", str(requests_file)])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == as_json({"requestId": "1000_A", "valid": True})
