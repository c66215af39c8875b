from __future__ import annotations

from .step_60_build_libraries import RepoScriptStep


class GenerateTagsStep(RepoScriptStep):
    """Tags are a convenience; a failure here never stops the run."""

    step_id = "70_generate_tags"
    abort_on_failure = False
    script = "./gen-tags.sh"
