"""Tests for profile normalisation and CSV round trip."""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from vcf_mcorr.core import CorrelationAccumulator, CorrelationConfig, CorrelationEngine
from vcf_mcorr.io import VariantRecord, VariantStream
from vcf_mcorr.metrics import (
    compute_correlation_profile,
    normalize_profile,
    read_profile_csv,
    write_profile_csv,
)
from vcf_mcorr.metrics.correlation import PROFILE_COLUMNS

from conftest import vcf_line


def test_two_site_profile(two_site_vcf):
    df = compute_correlation_profile(VariantStream(two_site_vcf), CorrelationConfig(max_lag=300))

    assert list(df.columns) == PROFILE_COLUMNS
    assert_array_equal(df["l"], [0, 5])
    assert_allclose(df["m"], [0.5, 0.25])
    assert_array_equal(df["n"], [0, 0])
    assert_array_equal(df["v"], [2, 1])
    assert list(df["t"]) == ["Ks", "P2"]
    assert list(df["b"]) == ["all", "all"]


def test_unobserved_lags_omitted():
    acc = CorrelationAccumulator(10)
    acc.add(0, 0.5)
    acc.add(0, 0.3)
    acc.add(7, 0.2)
    df = normalize_profile(acc)
    assert_array_equal(df["l"], [0, 7])
    assert_allclose(df["m"], [0.4, 0.25])


def test_zero_lag0_sum_gives_nan_p2():
    records = [VariantRecord("chr1", 1, "A", "G", "00"), VariantRecord("chr1", 3, "A", "G", "00")]
    acc = CorrelationEngine().run(records)
    df = normalize_profile(acc)
    assert df.loc[df["t"] == "Ks", "m"].iloc[0] == 0.0
    assert df.loc[df["t"] == "P2", "m"].isna().all()


def test_no_lag0_pairs():
    acc = CorrelationAccumulator(5)
    df = normalize_profile(acc)
    assert df.empty
    assert list(df.columns) == PROFILE_COLUMNS


def test_missing_format_warning(write_vcf, capsys):
    path = write_vcf([vcf_line(1, ["0|1"], fmt="DP"), vcf_line(2, ["1|1"])])
    df = compute_correlation_profile(VariantStream(path))
    assert "[WARNING] 1 SNP records had no GT FORMAT column" in capsys.readouterr().out
    assert_array_equal(df["v"], [1])


def test_csv_round_trip(tmp_path, two_site_vcf):
    df = compute_correlation_profile(VariantStream(two_site_vcf))
    out = write_profile_csv(df, tmp_path / "nested" / "profile.csv")

    assert out.read_text().splitlines() == [
        "l,m,n,v,t,b",
        "0,0.5,0,2,Ks,all",
        "5,0.25,0,1,P2,all",
    ]
    back = read_profile_csv(out)
    pd.testing.assert_frame_equal(back, df, check_dtype=False)


def test_read_profile_rejects_other_tables(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(ValueError, match="missing profile columns"):
        read_profile_csv(path)


def test_nan_written_explicitly(tmp_path):
    acc = CorrelationAccumulator(3)
    acc.add(0, 0.0)
    acc.add(2, 0.0)
    out = write_profile_csv(normalize_profile(acc), tmp_path / "p.csv")
    assert out.read_text().splitlines()[2] == "2,NaN,0,1,P2,all"
    assert np.isnan(read_profile_csv(out)["m"].iloc[1])


def test_values_written_with_g_format(tmp_path):
    acc = CorrelationAccumulator(2)
    acc.add(0, 1.0)
    acc.add(0, 0.0)
    acc.add(0, 0.0)
    acc.add(1, 1.0 / 3.0)
    out = write_profile_csv(normalize_profile(acc), tmp_path / "p.csv")
    assert out.read_text().splitlines()[1:] == [
        "0,0.333333,0,3,Ks,all",
        "1,0.333333,0,1,P2,all",
    ]


def test_verbose_summary(capsys, phased_vcf):
    compute_correlation_profile(VariantStream(phased_vcf), verbose=True)
    out = capsys.readouterr().out
    assert "[INFO] 5 data lines, 3 SNPs read, 2 non-SNP sites skipped, 3 SNPs in region" in out


def test_verbose_progress(capsys):
    records = (VariantRecord("chr1", pos, "A", "G", "1") for pos in range(1, 10001))
    CorrelationEngine(CorrelationConfig(max_lag=2)).run(records, verbose=True)
    assert "[INFO] Correlating: 10,000 records processed (window=2)..." in capsys.readouterr().out
