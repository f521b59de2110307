import os

import pytest
from xmp2pp3.core.errors import MetadataLoadError
from xmp2pp3.infrastructure.metadata.snapshot import MetadataSnapshot
from xmp2pp3.services.conversion import (
    FileStatus,
    discover_files,
    process_directory,
    process_file,
)

LIGHTROOM = "Adobe Photoshop Lightroom Classic 13.0 (Macintosh)"


def snapshot(xmp, tool=LIGHTROOM, **kwargs):
    data = dict(xmp)
    if tool:
        data["Xmp.xmp.CreatorTool"] = tool
    return MetadataSnapshot(xmp=data, width=1000, height=500, **kwargs)


def loader_for(metadata):
    def load(path):
        return metadata

    return load


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "IMG_0001.jpg"
    path.write_bytes(b"jpeg")
    return str(path)


def read_profile(image_path):
    with open(image_path + ".pp3", encoding="utf-8") as f:
        return f.read()


def test_writes_profile(image):
    metadata = snapshot({"Xmp.xmp.Rating": "3", "Xmp.crs.Exposure2012": "+0.50"})
    result = process_file(image, loader=loader_for(metadata))

    assert result.status == FileStatus.WRITTEN
    assert result.message == image + ".pp3"
    text = read_profile(image)
    assert "[General]\nRank=3\n" in text
    assert "Compensation=0.5\n" in text
    assert result.profile == text


def test_non_lightroom_file_is_skipped(image):
    metadata = snapshot({"Xmp.xmp.Rating": "3"}, tool="darktable 4.6")
    result = process_file(image, loader=loader_for(metadata))
    assert result.status == FileStatus.SKIPPED
    assert not os.path.exists(image + ".pp3")


def test_force_processes_non_lightroom_file(image):
    metadata = snapshot({"Xmp.xmp.Rating": "3"}, tool=None)
    result = process_file(image, force=True, loader=loader_for(metadata))
    assert result.status == FileStatus.WRITTEN


@pytest.mark.parametrize("name", ["IMG_0001.xmp", "IMG_0001.XMP", "IMG_0001.jpg.pp3"])
def test_sidecars_and_profiles_are_never_inputs(tmp_path, name):
    def fail(path):
        raise AssertionError("loader must not be called")

    result = process_file(str(tmp_path / name), loader=fail)
    assert result.status == FileStatus.SKIPPED


def test_unreadable_file_is_skipped(image):
    def fail(path):
        raise MetadataLoadError("corrupt")

    result = process_file(image, loader=fail)
    assert result.status == FileStatus.SKIPPED
    assert result.message == "unreadable"


def test_nothing_to_convert(image):
    result = process_file(image, loader=loader_for(snapshot({})))
    assert result.status == FileStatus.UNCHANGED
    assert not os.path.exists(image + ".pp3")


def test_bad_crop_still_converts_the_rest(image, caplog):
    metadata = snapshot(
        {
            "Xmp.xmp.Rating": "2",
            "Xmp.crs.HasCrop": "True",
            "Xmp.crs.CropLeft": "0.9",
            "Xmp.crs.CropRight": "0.1",
        },
        source=image,
    )
    result = process_file(image, loader=loader_for(metadata))

    assert result.status == FileStatus.WRITTEN
    text = read_profile(image)
    assert "Rank=2" in text
    assert "[Crop]" not in text
    assert "Skipping crop" in caplog.text


def test_type_mismatch_fails_the_file(image):
    # A bag where a number is expected
    metadata = snapshot({"Xmp.xmp.Rating": ["3", "4"]})
    result = process_file(image, loader=loader_for(metadata))
    assert result.status == FileStatus.FAILED
    assert not os.path.exists(image + ".pp3")


def test_dry_run_writes_nothing(image):
    metadata = snapshot({"Xmp.xmp.Label": "Green"})
    result = process_file(image, dry_run=True, loader=loader_for(metadata))
    assert result.status == FileStatus.UNCHANGED
    assert result.message == "dry run"
    assert "ColorLabel=3" in result.profile
    assert not os.path.exists(image + ".pp3")


def test_existing_profile_is_merged(image):
    with open(image + ".pp3", "w", encoding="utf-8") as f:
        f.write("[Version]\nAppVersion=5.10\n\n[General]\nRank=1\nInTrash=false\n")

    metadata = snapshot({"Xmp.xmp.Rating": "5"})
    result = process_file(image, loader=loader_for(metadata))

    assert result.status == FileStatus.WRITTEN
    text = read_profile(image)
    assert "AppVersion=5.10" in text
    assert "InTrash=false" in text
    assert "Rank=5" in text
    assert "Rank=1" not in text


def test_dump_metadata_logs_snapshot(image, caplog):
    caplog.set_level("DEBUG", logger="xmp2pp3")
    metadata = snapshot({"Xmp.xmp.Rating": "1"})
    process_file(image, dump_metadata=True, dry_run=True, loader=loader_for(metadata))
    assert "Xmp.xmp.CreatorTool" in caplog.text


def test_discover_files(tmp_path):
    (tmp_path / "b.CR2").write_bytes(b"raw")
    (tmp_path / "a.jpg").write_bytes(b"jpeg")
    (tmp_path / "a.xmp").write_text("<x/>")
    (tmp_path / "a.jpg.pp3").write_text("[General]\n")
    (tmp_path / "notes.txt").write_text("skip")
    sub = tmp_path / "roll2"
    sub.mkdir()
    (sub / "c.nef").write_bytes(b"raw")

    assert discover_files(str(tmp_path)) == [
        str(tmp_path / "a.jpg"),
        str(tmp_path / "b.CR2"),
        str(sub / "c.nef"),
    ]


def test_process_directory(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"jpeg")
    (tmp_path / "b.jpg").write_bytes(b"jpeg")
    metadata = snapshot({"Xmp.xmp.Rating": "4"})

    results = process_directory(str(tmp_path), loader=loader_for(metadata))

    assert [r.status for r in results] == [FileStatus.WRITTEN, FileStatus.WRITTEN]
    assert os.path.exists(str(tmp_path / "a.jpg.pp3"))
    assert os.path.exists(str(tmp_path / "b.jpg.pp3"))
