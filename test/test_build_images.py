from unittest.mock import patch

import build_images
from release_images.models import TriggerEvent


def test_manual_run_succeeds():
    with patch("build_images.PipelineService") as service:
        assert build_images.main(["--manual", "--dry-run"]) == 0
    kwargs = service.call_args.kwargs
    assert kwargs["event"] == TriggerEvent(name="workflow_dispatch")
    assert kwargs["dry_run"] is True
    service.return_value.run.assert_called_once()


def test_release_tag_and_only():
    with patch("build_images.PipelineService") as service:
        assert build_images.main(["--release-tag", "v1.2.0", "--only", "api", "--only", "ui"]) == 0
    kwargs = service.call_args.kwargs
    assert kwargs["event"] is None
    assert kwargs["release_tag"] == "v1.2.0"
    assert kwargs["only"] == ["api", "ui"]


def test_failure_exit_code():
    with patch("build_images.PipelineService") as service:
        service.return_value.run.side_effect = Exception("Image builds failed for: queue")
        assert build_images.main([]) == 1
