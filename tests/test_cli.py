import csv
import json

from click.testing import CliRunner

from splashkey.cli.main import cli

from conftest import KNOWN_SPLASH


def test_compute_from_tokens():
    result = CliRunner().invoke(cli, ["compute", "100:1", "101:2", "102:3"])

    assert result.exit_code == 0
    assert result.output.strip() == KNOWN_SPLASH


def test_compute_from_spectrum_file(tmp_path):
    path = tmp_path / "spectrum.json"
    path.write_text(json.dumps({"peaks": [[100.0, 1.0], [101.0, 2.0], [102.0, 3.0]]}))

    result = CliRunner().invoke(cli, ["compute", "--spectrum", str(path)])

    assert result.exit_code == 0
    assert result.output.strip() == KNOWN_SPLASH


def test_compute_rejects_bad_token():
    result = CliRunner().invoke(cli, ["compute", "100-1"])

    assert result.exit_code == 2
    assert "mz:intensity" in result.output


def test_compute_reports_degenerate_spectrum():
    result = CliRunner().invoke(cli, ["compute", "100:0", "200:0"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_compute_without_peaks():
    result = CliRunner().invoke(cli, ["compute"])
    assert result.exit_code == 2


def test_batch_msp_to_tsv(msp_file, tmp_path):
    output = tmp_path / "splashes.tsv"
    result = CliRunner().invoke(
        cli, ["batch", "-i", str(msp_file), "-o", str(output), "--quiet"]
    )

    assert result.exit_code == 0, result.output
    assert "Hashed 2 of 3 spectra" in result.output

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f, delimiter="\t"))
    assert rows[0]["splash"] == KNOWN_SPLASH
    assert rows[2]["error"]


def test_batch_jsonl_output(jsonl_file, tmp_path):
    output = tmp_path / "splashes.jsonl"
    result = CliRunner().invoke(
        cli,
        ["batch", "-i", str(jsonl_file), "-o", str(output), "--output-format", "jsonl", "--quiet"],
    )

    assert result.exit_code == 0, result.output
    rows = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert rows[0] == {"id": "s1", "name": "Compound A", "splash": KNOWN_SPLASH, "error": None}


def test_batch_raise_policy_fails(msp_file, tmp_path):
    result = CliRunner().invoke(
        cli,
        ["batch", "-i", str(msp_file), "-o", str(tmp_path / "out.tsv"), "--on-error", "raise", "--quiet"],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "out.tsv").exists()


def test_batch_with_config_file(msp_file, tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("output:\n  format: jsonl\nshow_progress: false\n", encoding="utf-8")
    output = tmp_path / "out.txt"

    result = CliRunner().invoke(
        cli, ["batch", "-i", str(msp_file), "-o", str(output), "-c", str(config)]
    )

    assert result.exit_code == 0, result.output
    first = json.loads(output.read_text(encoding="utf-8").splitlines()[0])
    assert first["splash"] == KNOWN_SPLASH


def test_validate():
    runner = CliRunner()

    ok = runner.invoke(cli, ["validate", KNOWN_SPLASH])
    assert ok.exit_code == 0
    assert ok.output.startswith("OK")

    bad = runner.invoke(cli, ["validate", KNOWN_SPLASH, "splash10-nope"])
    assert bad.exit_code == 1
    assert "INVALID" in bad.output


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "splashkey" in result.output
