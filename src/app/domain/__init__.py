"""Domínio: eventos brutos, payloads de webhook e registros de enquete."""
