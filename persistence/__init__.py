from persistence.serializer import (
    serialize,
    deserialize,
    result_path,
    write,
    save_record,
    WriteFailure,
    WriteFailureKind,
    SerializationError,
)
from persistence.assets import download_asset, asset_path, DownloadFailure, DownloadFailureKind
