"""Transfer queue: conflict resolution, suspended batches and the queue controller."""
