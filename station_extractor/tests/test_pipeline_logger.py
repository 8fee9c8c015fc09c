"""Tests for station_extractor.core.pipeline_logger file logging."""

import logging

from station_extractor.core.pipeline_logger import PipelineLogger, get_logger


def file_handlers(pipeline_logger: PipelineLogger) -> list[logging.FileHandler]:
    return [h for h in pipeline_logger.logger.handlers if isinstance(h, logging.FileHandler)]


class TestFileLogging:

    def test_no_log_dir_no_file(self):
        pipeline_logger = get_logger()
        pipeline_logger.start_pipeline("Run")
        assert pipeline_logger.log_file is None
        assert file_handlers(pipeline_logger) == []

    def test_log_file_created(self, tmp_path):
        pipeline_logger = get_logger(log_dir=tmp_path)
        pipeline_logger.start_pipeline("ECJ 2024 / All", sources=4)
        pipeline_logger.info("hello")

        assert pipeline_logger.log_file.parent == tmp_path
        assert pipeline_logger.log_file.name.startswith("ecj_2024_all_")
        assert pipeline_logger.log_file.exists()

    def test_repeated_runs_keep_one_file_handler(self, tmp_path):
        pipeline_logger = get_logger(log_dir=tmp_path)
        pipeline_logger.start_pipeline("First")
        pipeline_logger.start_pipeline("Second")

        [handler] = file_handlers(pipeline_logger)
        assert handler.baseFilename == str(pipeline_logger.log_file)
        assert pipeline_logger.log_file.name.startswith("second_")
