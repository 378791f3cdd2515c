"""Daily journals: models, markdown parsing and writing, index storage and service."""