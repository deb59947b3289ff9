import os
import sys
import traceback

workers = 4
worker_class = "gthread"
threads = 4
bind = "0.0.0.0:{}".format(os.getenv("PORT", "6011"))
accesslog = '-'
# The SSN authority call blocks for up to its connect + read timeouts
timeout = 30


def on_starting(server):
    server.log.info("Starting PII Records API")


def worker_abort(worker):
    worker.log.info("worker received ABORT {}".format(worker.pid))
    for threadId, stack in sys._current_frames().items():
        worker.log.error(''.join(traceback.format_stack(stack)))


def on_exit(server):
    server.log.info("Stopping PII Records API")


def worker_int(worker):
    worker.log.info("worker: received SIGINT {}".format(worker.pid))
