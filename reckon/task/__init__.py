"""Multi-day tasks: models, markdown files, index storage and service."""