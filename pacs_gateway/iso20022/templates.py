"""
Sample pacs.008 / pacs.002 documents.

Served by ``GET /v1/iso20022/templates`` for clients that want a starting
point; every sample parses with the mappers in this package.
"""

TEMPLATES: dict[str, dict[str, str]] = {
    "pacs.008": {
        "messageType": "pacs.008",
        "name": "Customer Credit Transfer",
        "description": "Single EUR credit transfer settled through the clearing system.",
        "sampleXml": """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.008.001.08">
  <FIToFICstmrCdtTrf>
    <GrpHdr>
      <MsgId>GW-2025-10-06-001</MsgId>
      <CreDtTm>2025-10-06T10:15:00Z</CreDtTm>
      <NbOfTxs>1</NbOfTxs>
      <IntrBkSttlmDt>2025-10-06</IntrBkSttlmDt>
      <SttlmInf>
        <SttlmMtd>CLRG</SttlmMtd>
      </SttlmInf>
    </GrpHdr>
    <CdtTrfTxInf>
      <PmtId>
        <InstrId>GW-REF-001</InstrId>
        <EndToEndId>E2E-001</EndToEndId>
        <TxId>TX-001</TxId>
        <UETR>91398cbd-0838-453f-b2c7-536e829f2b8e</UETR>
      </PmtId>
      <IntrBkSttlmAmt Ccy="EUR">1000.00</IntrBkSttlmAmt>
      <ChrgBr>SLEV</ChrgBr>
      <InstgAgt>
        <FinInstnId><BICFI>GATEFRPPXXX</BICFI></FinInstnId>
      </InstgAgt>
      <InstdAgt>
        <FinInstnId><BICFI>MCBHKHKHXXX</BICFI></FinInstnId>
      </InstdAgt>
      <Dbtr>
        <Nm>Jean Dupont</Nm>
      </Dbtr>
      <DbtrAcct>
        <Id><IBAN>FR1420041010050500013M02606</IBAN></Id>
      </DbtrAcct>
      <DbtrAgt>
        <FinInstnId><BICFI>GATEFRPPXXX</BICFI></FinInstnId>
      </DbtrAgt>
      <CdtrAgt>
        <FinInstnId><BICFI>MCBHKHKHXXX</BICFI></FinInstnId>
      </CdtrAgt>
      <Cdtr>
        <Nm>Ant</Nm>
      </Cdtr>
      <CdtrAcct>
        <Id><IBAN>FR7612345678901234567890185</IBAN></Id>
      </CdtrAcct>
      <RmtInf>
        <Ustrd>Invoice 2025-0917</Ustrd>
      </RmtInf>
    </CdtTrfTxInf>
  </FIToFICstmrCdtTrf>
</Document>""",
    },
    "pacs.002.ACSP": {
        "messageType": "pacs.002",
        "name": "Status Report (Accepted, Settlement In Process)",
        "description": "Provisional acceptance: funds are on hold, settlement pending.",
        "sampleXml": """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.002.001.10">
  <FIToFIPmtStsRpt>
    <GrpHdr>
      <MsgId>MCB-20251006101510-ACSP</MsgId>
      <CreDtTm>2025-10-06T10:15:10Z</CreDtTm>
    </GrpHdr>
    <OrgnlGrpInfAndSts>
      <OrgnlMsgId>GW-2025-10-06-001</OrgnlMsgId>
      <OrgnlMsgNmId>pacs.008.001.08</OrgnlMsgNmId>
      <GrpSts>ACSP</GrpSts>
      <StsRsnInf>
        <Rsn><Prtry>G000</Prtry></Rsn>
        <AddtlInf>Accepted for processing; funds hold placed</AddtlInf>
      </StsRsnInf>
    </OrgnlGrpInfAndSts>
    <TxInfAndSts>
      <OrgnlInstrId>GW-REF-001</OrgnlInstrId>
      <OrgnlEndToEndId>E2E-001</OrgnlEndToEndId>
      <OrgnlTxId>TX-001</OrgnlTxId>
      <TxSts>ACSP</TxSts>
    </TxInfAndSts>
  </FIToFIPmtStsRpt>
</Document>""",
    },
    "pacs.002.ACSC": {
        "messageType": "pacs.002",
        "name": "Status Report (Settlement Completed)",
        "description": "Final positive status carrying acceptance time and settlement date.",
        "sampleXml": """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.002.001.10">
  <FIToFIPmtStsRpt>
    <GrpHdr>
      <MsgId>MCB-20251006101540-ACSC</MsgId>
      <CreDtTm>2025-10-06T10:15:40Z</CreDtTm>
    </GrpHdr>
    <OrgnlGrpInfAndSts>
      <OrgnlMsgId>GW-2025-10-06-001</OrgnlMsgId>
      <OrgnlMsgNmId>pacs.008.001.08</OrgnlMsgNmId>
      <GrpSts>ACSC</GrpSts>
    </OrgnlGrpInfAndSts>
    <TxInfAndSts>
      <OrgnlEndToEndId>E2E-001</OrgnlEndToEndId>
      <OrgnlTxId>TX-001</OrgnlTxId>
      <TxSts>ACSC</TxSts>
      <AccptncDtTm>2025-10-06T10:15:38Z</AccptncDtTm>
      <FctvIntrBkSttlmDt><Dt>2025-10-06</Dt></FctvIntrBkSttlmDt>
    </TxInfAndSts>
  </FIToFIPmtStsRpt>
</Document>""",
    },
    "pacs.002.RJCT": {
        "messageType": "pacs.002",
        "name": "Status Report (Rejected)",
        "description": "Negative status with an external reason code (AC04 closed account).",
        "sampleXml": """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.002.001.10">
  <FIToFIPmtStsRpt>
    <GrpHdr>
      <MsgId>MCB-20251006101545-RJCT</MsgId>
      <CreDtTm>2025-10-06T10:15:45Z</CreDtTm>
    </GrpHdr>
    <OrgnlGrpInfAndSts>
      <OrgnlMsgId>GW-2025-10-06-001</OrgnlMsgId>
      <OrgnlMsgNmId>pacs.008.001.08</OrgnlMsgNmId>
      <GrpSts>RJCT</GrpSts>
    </OrgnlGrpInfAndSts>
    <TxInfAndSts>
      <OrgnlEndToEndId>E2E-001</OrgnlEndToEndId>
      <OrgnlTxId>TX-001</OrgnlTxId>
      <TxSts>RJCT</TxSts>
      <StsRsnInf>
        <Rsn><Cd>AC04</Cd></Rsn>
        <AddtlInf>Creditor account closed</AddtlInf>
      </StsRsnInf>
    </TxInfAndSts>
  </FIToFIPmtStsRpt>
</Document>""",
    },
}
