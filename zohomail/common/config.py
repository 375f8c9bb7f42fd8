from typing import Literal

Backend = Literal["live", "dry_run"]

DataCenter = Literal["com", "eu", "in", "au", "jp"]

Resource = Literal["message", "folder", "account"]

Operation = Literal["get", "getMany", "send", "saveDraft", "getAll"]

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
