import math
from pathlib import Path

import pytest

from orrery.core.catalog import (
    BodyKind,
    NeoRecord,
    OrbitalElementSet,
    element_set_from_dict,
    load_neo_csv,
    neo_to_element_set,
    parse_neo_row,
)
from orrery.core.constants import J2000_JD
from orrery.objects.solar_system import SOLAR_SYSTEM_BODIES, solar_system_element_sets
from orrery.physics.orbit import SecularRates

EROS_ROW = {
    "full_name": "433 Eros (A898 PA)",
    "neo": "Y",
    "pha": "N",
    "diameter": "16.84",
    "GM": "0.0004463",
    "e": "0.2228",
    "a": "1.4583",
    "q": "1.1334",
    "i": "10.828",
    "om": "304.29",
    "w": "178.93",
    "ma": "310.55",
    "ad": "1.7832",
    "tp": "2460497.71",
    "epoch": "2460600.5",
}

CSV_HEADER = "full_name,neo,pha,diameter,GM,e,a,q,i,om,w,ma,ad,tp,epoch\n"


class TestParseNeoRow:
    def test_parses_all_columns(self):
        rec = parse_neo_row(EROS_ROW)
        assert rec.name == "433 Eros (A898 PA)"
        assert rec.neo is True
        assert rec.pha is False
        assert rec.a == 1.4583
        assert rec.e == 0.2228
        assert rec.om == 304.29
        assert rec.w == 178.93
        assert rec.ma == 310.55
        assert rec.gm == 0.0004463
        assert rec.epoch == 2460600.5

    def test_empty_cells_are_missing(self):
        row = dict(EROS_ROW, GM="", diameter=" ", epoch="")
        rec = parse_neo_row(row)
        assert rec.gm is None
        assert rec.diameter is None
        assert rec.epoch is None

    def test_name_column_fallback(self):
        row = dict(EROS_ROW)
        del row["full_name"]
        row["name"] = "Eros"
        assert parse_neo_row(row).name == "Eros"

    def test_missing_name(self):
        with pytest.raises(ValueError, match="no name"):
            parse_neo_row(dict(EROS_ROW, full_name=""))

    def test_missing_orbital_column(self):
        with pytest.raises(ValueError, match="Missing required column 'a'"):
            parse_neo_row(dict(EROS_ROW, a=""))

    def test_non_numeric_value(self):
        with pytest.raises(ValueError, match="Error parsing NEO '433 Eros"):
            parse_neo_row(dict(EROS_ROW, e="abc"))

    def test_bad_flag(self):
        with pytest.raises(ValueError, match="Column 'pha' must be Y or N"):
            parse_neo_row(dict(EROS_ROW, pha="maybe"))


class TestNeoMapping:
    def test_mean_anomaly_at_epoch(self):
        es = neo_to_element_set(parse_neo_row(EROS_ROW))
        assert es.kind is BodyKind.NEO
        assert es.longitude_of_ascending_node == 304.29
        assert es.longitude_of_perihelion == pytest.approx(304.29 + 178.93)
        assert es.mean_longitude == pytest.approx(304.29 + 178.93 + 310.55)
        assert es.epoch_jd == 2460600.5
        assert es.radius_km == pytest.approx(8.42)

        el = es.to_elements()
        assert el.argument_of_perihelion_deg == pytest.approx(178.93)
        assert el.mean_anomaly_at_epoch_deg == pytest.approx(310.55)

    def test_perihelion_time_fallback(self):
        rec = parse_neo_row(dict(EROS_ROW, epoch=""))
        es = neo_to_element_set(rec)
        assert es.epoch_jd == 2460497.71
        assert es.to_elements().mean_anomaly_at_epoch_deg == pytest.approx(0.0)

    def test_mean_anomaly_without_epoch_or_tp(self):
        rec = NeoRecord(name="X", e=0.1, a=1.2, i=1.0, om=10.0, w=20.0, ma=30.0)
        es = neo_to_element_set(rec)
        assert es.epoch_jd == J2000_JD
        assert es.mean_longitude == pytest.approx(60.0)

    def test_unplaceable_record(self):
        rec = NeoRecord(name="X", e=0.1, a=1.2, i=1.0, om=10.0, w=20.0)
        with pytest.raises(ValueError, match="needs either ma with epoch, or tp"):
            neo_to_element_set(rec)


class TestLoadNeoCsv:
    def test_load(self, tmp_path):
        path = tmp_path / "neos.csv"
        path.write_text(
            CSV_HEADER
            + "433 Eros (A898 PA),Y,N,16.84,0.0004463,0.2228,1.4583,1.1334,10.828,304.29,178.93,310.55,1.7832,2460497.71,2460600.5\n"
            + "1566 Icarus (1949 MA),Y,Y,1.0,,0.8269,1.0780,0.1866,22.80,87.95,31.43,,1.9694,2460510.43,\n",
            encoding="utf-8",
        )
        sets = load_neo_csv(path)
        assert [s.name for s in sets] == ["433 Eros (A898 PA)", "1566 Icarus (1949 MA)"]
        assert sets[1].epoch_jd == 2460510.43

    def test_limit(self, tmp_path):
        path = tmp_path / "neos.csv"
        row = "433 Eros,Y,N,16.84,,0.2228,1.4583,1.1334,10.828,304.29,178.93,310.55,1.7832,2460497.71,2460600.5\n"
        path.write_text(CSV_HEADER + row * 5, encoding="utf-8")
        assert len(load_neo_csv(path, limit=3)) == 3

    def test_bad_row_reports_line_when_strict(self, tmp_path):
        path = tmp_path / "neos.csv"
        path.write_text(CSV_HEADER + "Broken,Y,N,,,0.2,,1.1,10,304,178,310,1.7,2460497.71,\n", encoding="utf-8")
        with pytest.raises(ValueError, match="neos.csv:2"):
            load_neo_csv(path, strict=True)

    def test_bad_rows_are_skipped(self, tmp_path, caplog):
        path = tmp_path / "neos.csv"
        path.write_text(
            CSV_HEADER
            + "433 Eros,Y,N,16.84,,0.2228,1.4583,1.1334,10.828,304.29,178.93,310.55,1.7832,2460497.71,2460600.5\n"
            + "Bad Rock,Y,N,,,0.2,,1.1,10,304,178,310,1.7,2460497.71,2460600.5\n"
            + "Not A Number,Y,N,,,abc,1.2,1.1,10,304,178,310,1.7,2460497.71,2460600.5\n"
            + "1566 Icarus,Y,Y,1.0,,0.8269,1.0780,0.1866,22.80,87.95,31.43,,1.9694,2460510.43,\n",
            encoding="utf-8",
        )
        with caplog.at_level("WARNING", logger="orrery.core.catalog"):
            sets = load_neo_csv(path)
        assert [s.name for s in sets] == ["433 Eros", "1566 Icarus"]
        assert "neos.csv:3" in caplog.text
        assert "neos.csv:4" in caplog.text


class TestElementSets:
    def test_to_elements_defaults_rates(self):
        es = OrbitalElementSet(
            name="X", semi_major_axis=2.0, eccentricity=0.1, inclination=1.0,
            longitude_of_ascending_node=2.0, longitude_of_perihelion=3.0, mean_longitude=4.0,
        )
        assert es.to_elements().rates == SecularRates()

    def test_star_entry_has_no_valid_elements(self):
        es = element_set_from_dict(SOLAR_SYSTEM_BODIES[0])
        assert es.kind is BodyKind.STAR
        assert math.isnan(es.semi_major_axis)
        with pytest.raises(ValueError):
            es.to_elements()

    def test_solar_system_sets(self):
        sets = solar_system_element_sets()
        by_name = {s.name: s for s in sets}
        assert by_name["Moon"].kind is BodyKind.SATELLITE
        assert by_name["Moon"].parent == "Earth"
        assert by_name["Earth"].rates is not None
        assert by_name["Earth"].to_elements().semi_major_axis_au == pytest.approx(1.00000018)
        for s in sets:
            if s.kind is not BodyKind.STAR:
                s.to_elements()


def test_shipped_sample_catalog_loads():
    path = Path(__file__).resolve().parents[1] / "data" / "neos_sample.csv"
    sets = load_neo_csv(path, strict=True)
    assert len(sets) == 3
    assert all(s.to_elements().eccentricity < 1.0 for s in sets)
