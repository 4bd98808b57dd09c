"""IHE XDS / DSUB identifiers used when reading Notify messages.

Classification and external-identifier scheme UUIDs are fixed by the IHE
ITI Technical Framework (ITI TF-3, 4.2.5).
"""

NOTIFY_ELEMENT = "Notify"

# DocumentEntry classification schemes
URN_CLASS_CODE = "urn:uuid:41a5887f-8865-4c09-adf7-e362475b143a"
URN_CONF_CODE = "urn:uuid:f4f85eac-e6cb-4883-b524-f2705394840f"
URN_FORMAT_CODE = "urn:uuid:a09d5840-386c-46f2-b5ad-9c3699a4309d"
URN_FACILITY_CODE = "urn:uuid:f33fb8ac-18af-42cc-ae0e-ed0b0bdb91e1"
URN_PRACTICE_CODE = "urn:uuid:cccf5598-8b07-4b77-a05e-ae952c785ead"
URN_TYPE_CODE = "urn:uuid:f0306f51-975f-434e-a61c-c59651d33983"
URN_AUTHOR = "urn:uuid:93606bcf-9494-43ec-9b4e-a7748d1a838d"

# DocumentEntry external identifier schemes
URN_XDS_PID = "urn:uuid:58a6f841-87b3-4a3e-92fd-a8ffeff98427"
URN_XDS_DOCUID = "urn:uuid:2e82c1f6-a085-4c72-9da3-8640a32e42ab"

# Slot names
REPOSITORY_UID = "repositoryUniqueId"
AUTHOR_PERSON = "authorPerson"
AUTHOR_INSTITUTION = "authorInstitution"

# HL7 CX assigning-authority separator on the XDS patient id
PID_AUTHORITY_SEPARATOR = "^^^"
