from pydantic import BaseModel, ConfigDict


class LibraryVendorBase(BaseModel):
    vendor: str


class LibraryVendorCreate(LibraryVendorBase):
    pass


class LibraryVendor(LibraryVendorBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


class LibraryBase(BaseModel):
    library_name: str
    language: str | None = None
    license: str | None = None


class LibraryCreate(LibraryBase):
    pass


class Library(LibraryBase):
    id: int
    library_vendor_id: int
    model_config = ConfigDict(from_attributes=True)


class LibraryVersion(BaseModel):
    id: int
    library_version: str
    library_id: int
    model_config = ConfigDict(from_attributes=True)
