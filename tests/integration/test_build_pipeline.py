"""
Integration tests for the build pipeline.
Tests: project dir → staged assets + documents + PDF in dist/, with build events.
The browser is replaced by a fake launcher.
"""

import asyncio
import json
import shutil
from pathlib import Path

import pytest

from vitae.contexts.building import AssetManifest, BuildCoordinator, BuildPaths, build_pdf_only, build_site
from vitae.contexts.intake import DataLoadError
from vitae.contexts.templating import RenderError
from vitae.utils.event_logging import get_recent_events

SAMPLE_DATA_FILE = Path(__file__).parents[2] / "data" / "resume-data.json"

MANIFEST = AssetManifest(volatile=["css", "robots.txt"], stable=["vendor"])


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "site"
    (root / "data").mkdir(parents=True)
    shutil.copy(SAMPLE_DATA_FILE, root / "data" / "resume-data.json")
    (root / "css").mkdir()
    (root / "css" / "resume.min.css").write_text("body{}", encoding="utf-8")
    (root / "vendor").mkdir()
    (root / "vendor" / "lib.js").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def paths(project):
    return BuildPaths(
        project_root=project,
        data_file=project / "data" / "resume-data.json",
        dist_dir=project / "dist",
    )


@pytest.mark.integration
def test_build_site_produces_all_outputs(paths, fake_launcher, events_file):
    result = asyncio.run(build_site(paths, launcher=fake_launcher, manifest=MANIFEST))

    dist = paths.dist_dir
    assert (dist / "index.html").exists()
    assert (dist / "resume-template.html").exists()
    assert json.loads((dist / "site.webmanifest").read_text(encoding="utf-8"))["short_name"] == "Jane Doe"
    assert result.pdf.pdf_path == dist / "generated-pdf" / "JaneDoe_Resume.pdf"
    assert result.pdf.pdf_path.exists()
    assert (dist / "css" / "resume.min.css").exists()
    assert (dist / "vendor" / "lib.js").exists()
    assert result.staging.skipped == ["robots.txt"]

    # PDF printed from the print document that was just written
    assert fake_launcher.browser.contents == [(dist / "resume-template.html").read_text(encoding="utf-8")]
    assert fake_launcher.releases == 1

    events = [e["event_type"] for e in get_recent_events()]
    assert events == ["build_started", "build_completed"]


@pytest.mark.integration
def test_configured_pdf_filename(paths, fake_launcher, events_file):
    paths.pdf_filename = "Resume.pdf"

    result = asyncio.run(build_site(paths, launcher=fake_launcher, manifest=MANIFEST))

    assert result.pdf.pdf_path == paths.dist_dir / "generated-pdf" / "Resume.pdf"


@pytest.mark.integration
def test_missing_data_file_fails_build(paths, fake_launcher, events_file):
    paths.data_file.unlink()

    with pytest.raises(DataLoadError):
        asyncio.run(build_site(paths, launcher=fake_launcher, manifest=MANIFEST))

    assert fake_launcher.launches == 0
    # Staging ran before data loading
    assert (paths.dist_dir / "css" / "resume.min.css").exists()

    failed = get_recent_events(event_type="build_failed")
    assert failed[-1]["error_type"] == "DataLoadError"


@pytest.mark.integration
def test_missing_field_fails_before_any_document(paths, fake_launcher, events_file):
    data = json.loads(paths.data_file.read_text(encoding="utf-8"))
    del data["experience"][0]["companyUrl"]
    paths.data_file.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(RenderError) as exc_info:
        asyncio.run(build_site(paths, launcher=fake_launcher, manifest=MANIFEST))

    assert exc_info.value.field_path == "experience[0].companyUrl"
    assert not (paths.dist_dir / "index.html").exists()
    assert not (paths.dist_dir / "resume-template.html").exists()


@pytest.mark.integration
def test_build_pdf_only_regenerates_print_document(paths, fake_launcher):
    result = asyncio.run(build_pdf_only(paths, launcher=fake_launcher))

    assert paths.print_path.exists()
    assert result.pdf_path == paths.dist_dir / "generated-pdf" / "JaneDoe_Resume.pdf"
    assert not paths.website_path.exists()


@pytest.mark.integration
def test_build_pdf_only_from_html(paths, fake_launcher, tmp_path):
    html_path = tmp_path / "custom.html"
    html_path.write_text("<html><body>custom</body></html>", encoding="utf-8")
    output = tmp_path / "out" / "custom.pdf"

    result = asyncio.run(
        build_pdf_only(paths, html_path=html_path, output_path=output, launcher=fake_launcher)
    )

    assert result.pdf_path == output
    assert fake_launcher.browser.contents == ["<html><body>custom</body></html>"]


@pytest.mark.integration
def test_from_env_resolves_against_project_root(project):
    paths = BuildPaths.from_env(project)

    assert paths.project_root == project.resolve()
    assert paths.data_file == project.resolve() / "data" / "resume-data.json"
    assert paths.website_path == project.resolve() / "dist" / "index.html"
    assert paths.manifest_path.name == "site.webmanifest"


@pytest.mark.integration
def test_coordinated_builds_never_overlap(paths, make_launcher, events_file):
    async def scenario():
        launcher = make_launcher()
        coordinator = BuildCoordinator(
            lambda: build_site(paths, launcher=launcher, manifest=MANIFEST), debounce_s=0.01
        )
        coordinator.trigger()
        for _ in range(10):
            coordinator.trigger()
        await asyncio.wait_for(coordinator.wait_until_idle(), timeout=10)
        return launcher, coordinator

    launcher, coordinator = asyncio.run(scenario())

    assert coordinator.runs_started == 2
    assert coordinator.runs_failed == 0
    assert launcher.launches == 2
    events = [e["event_type"] for e in get_recent_events(n=100)]
    assert events == ["build_started", "build_completed", "build_started", "build_completed"]
