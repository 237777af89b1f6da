import logging
from be.model.deadline import DeadlineProcessor, CronResult


class CronJob:
    def __init__(self, processor: DeadlineProcessor):
        self.processor = processor

    def run(self) -> (int, dict):
        try:
            result = self.processor.handle_cron_deadlines()
            if result is None:
                result = CronResult()

            if result.total_processed > 0:
                logging.info(
                    f"[Cron Job] Processed: {result.total_processed} "
                    f"(Cancelled: {result.cancelled}, Completed: {result.completed})"
                )
            else:
                logging.info("[Cron Job] No orders to process.")

            return 200, {"success": True, "data": result.to_dict()}
        except Exception as e:
            logging.exception("[Cron Job Error]")
            return 500, {"success": False, "error": str(e)}
