from .json_loader import dump_result_file, load_assessment_file, load_divisions_file

__all__ = ["dump_result_file", "load_assessment_file", "load_divisions_file"]
