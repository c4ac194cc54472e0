from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FlutterVersionDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    framework_version: str = Field(alias="frameworkVersion")
    channel: str
    repository_url: str = Field(alias="repositoryUrl")
    framework_revision: str = Field(alias="frameworkRevision")
    framework_commit_date: str = Field(alias="frameworkCommitDate")
    engine_revision: str = Field(alias="engineRevision")
    tools_python_version: str = Field(alias="toolsPythonVersion")


class MachineVersionReportDTO(FlutterVersionDTO):
    flutter_root: str = Field(alias="flutterRoot", min_length=1)
