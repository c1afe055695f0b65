from ntriples_service.config import BIND, LOG_LEVEL, WORKERS

bind = BIND
workers = WORKERS
worker_class = 'uvicorn.workers.UvicornWorker'
proc_name = 'ntriples-service'
loglevel = LOG_LEVEL.lower()
wsgi_app = 'ntriples_service.app:app'
