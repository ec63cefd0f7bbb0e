from pydantic import BaseModel, ConfigDict


class ApplicationBase(BaseModel):
    name: str


class ApplicationCreate(ApplicationBase):
    pass


class Application(ApplicationBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


class ApplicationVersionBase(BaseModel):
    version: str


class ApplicationVersion(ApplicationVersionBase):
    id: int
    application_id: int
    model_config = ConfigDict(from_attributes=True)


class ApplicationDependency(BaseModel):
    id: int
    application_version_id: int
    library_version_id: int
    model_config = ConfigDict(from_attributes=True)
