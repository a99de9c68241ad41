"""InboxAudit: email deliverability auditing for a domain."""
