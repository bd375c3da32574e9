"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: float) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5KB, 3.2MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                if unit == "B":
                    return f"{int(size_bytes)}B"
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def duration_to_human(seconds: float) -> str:
        """
        Convert a duration to a short human-readable string (e.g., 0.42s, 3m 05s, 1h 02m).
        """
        if seconds < 0:
            seconds = 0.0

        if seconds < 60:
            return f"{seconds:.2f}s"

        total = int(seconds)
        hours, rest = divmod(total, 3600)
        minutes, secs = divmod(rest, 60)
        if hours:
            return f"{hours}h {minutes:02d}m"
        return f"{minutes}m {secs:02d}s"

    @staticmethod
    def rate_to_human(bytes_per_second: int) -> str:
        """
        Convert a throughput to a human-readable string (e.g., 12.50MB/s).
        """
        return f"{ConvertUtils.bytes_to_human(bytes_per_second)}/s"
