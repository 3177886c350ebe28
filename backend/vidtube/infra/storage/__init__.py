from vidtube.infra.storage.s3_media_uplink import S3MediaUplink

__all__ = ["S3MediaUplink"]
