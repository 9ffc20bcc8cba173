"""Host adapters driving a QueueSession from a UI toolkit."""
