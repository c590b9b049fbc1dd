"""
TestManifest — the inputs and destinations of one browser test run.

Field names follow the camelCase keys of the manifest file; Python
code uses the snake_case attributes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COPY_TO = ".tests"


class TestManifest(BaseModel):
    """A validated test manifest merged with command-line seeds."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str
    entry_point: str = Field(alias="entryPoint")
    save_results_to: str | None = Field(default=None, alias="saveResultsTo")
    copy_to: str = Field(default=DEFAULT_COPY_TO, alias="copyTo")
    target: str | None = None

    files_to_copy: list[str] = Field(default_factory=list, alias="filesToCopy")
    test_sets_to_run: list[str] = Field(default_factory=list, alias="testSetsToRun")
    parameters: dict[str, Any] = Field(default_factory=dict)
    launch_options: dict[str, Any] = Field(default_factory=dict, alias="launchOptions")

    close_browser_on_completion: bool = Field(default=True, alias="closeBrowserOnCompletion")
    remove_automation_files_on_completion: bool = Field(
        default=True, alias="removeAutomationFilesOnCompletion"
    )
    store_only_latest_results: bool = Field(default=False, alias="storeOnlyLatestResults")

    # Where the manifest was loaded from (not part of the file)
    filename: str | None = None

    @property
    def entry_module(self) -> str:
        """Page-relative import path of the deployed entry point."""
        return f"./{self.copy_to.strip('/')}/{self.entry_point}"
